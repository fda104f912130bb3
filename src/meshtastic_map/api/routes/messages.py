"""Text message endpoints."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import and_, desc, func
from sqlalchemy.orm import Session

from ...database.models import Node, TextMessage
from ..dependencies import get_db, get_node
from ..schemas import NODE_ERROR_RESPONSES, TextMessageResponse, TextMessageSummary

router = APIRouter()


@router.get(
    "/latest-messages",
    response_model=Dict[str, TextMessageResponse],
    summary="Get the latest message sent to each recipient",
    description="Object keyed by recipient node id (as a string)",
)
def get_latest_messages(db: Session = Depends(get_db)) -> Dict[str, TextMessageResponse]:
    """
    Get the most recent text message per recipient.

    Rows with the highest rx_time per `to` are selected; if several share
    that rx_time the highest id wins.

    Args:
        db: Database session

    Returns:
        Mapping of str(to) to the latest message
    """
    latest = (
        db.query(TextMessage.to, func.max(TextMessage.rx_time).label("latest"))
        .group_by(TextMessage.to)
        .subquery()
    )

    messages = (
        db.query(TextMessage)
        .join(
            latest,
            and_(TextMessage.to == latest.c.to, TextMessage.rx_time == latest.c.latest),
        )
        .order_by(TextMessage.rx_time, TextMessage.id)
        .all()
    )

    # Ascending id order, so on ties the newest row overwrites
    response: Dict[str, TextMessageResponse] = {}
    for message in messages:
        response[str(message.to)] = TextMessageResponse.model_validate(message)
    return response


@router.get(
    "/nodes/{node_id}/messages",
    response_model=List[TextMessageSummary],
    summary="Get messages sent to a node",
    responses=NODE_ERROR_RESPONSES,
)
def get_node_messages(
    count: Optional[int] = Query(
        None, ge=1, description="Maximum number of messages to return, newest first (default: all)"
    ),
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> List[TextMessageSummary]:
    """
    Get text messages addressed to a node.

    Args:
        count: Row limit, or None for all
        node: Node resolved from the path
        db: Database session

    Returns:
        Messages ordered by rx_time, newest first
    """
    query = (
        db.query(TextMessage)
        .filter(TextMessage.to == node.node_id)
        .order_by(desc(TextMessage.rx_time), desc(TextMessage.id))
    )
    if count is not None:
        query = query.limit(count)

    return [TextMessageSummary.model_validate(message) for message in query.all()]
