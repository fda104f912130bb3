"""FastAPI dependency injection for database and enum access."""

from typing import Generator

from fastapi import Depends, HTTPException, Path, Request, status
from sqlalchemy.orm import Session

from ..database.engine import session_scope
from ..database.models import Node
from ..protobufs import EnumResolver

# node_id columns are signed BIGINT
MAX_NODE_ID = 2**63 - 1


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get a database session.

    Yields:
        SQLAlchemy session

    Example:
        ```python
        @router.get("/nodes")
        def list_nodes(db: Session = Depends(get_db)):
            return db.query(Node).all()
        ```
    """
    with session_scope() as session:
        yield session


def get_enum_resolver(request: Request) -> EnumResolver:
    """
    Dependency to get the enum tables loaded by the application factory.

    Raises:
        RuntimeError: If the application was built without them
    """
    resolver = getattr(request.app.state, "enum_resolver", None)
    if resolver is None:
        raise RuntimeError("Enum resolver not initialized")
    return resolver


def get_node(
    node_id: int = Path(..., ge=0, le=MAX_NODE_ID, description="Numeric Meshtastic node id"),
    db: Session = Depends(get_db),
) -> Node:
    """
    Dependency resolving the {node_id} path parameter to a node.

    Raises:
        HTTPException: 404 if no node has this id
    """
    node = Node.find_by_node_id(db, node_id)
    if node is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return node

