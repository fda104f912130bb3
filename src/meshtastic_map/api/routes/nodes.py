"""Node listing, lookup and neighbour endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database.models import Node
from ...protobufs import EnumResolver
from ...utils.neighbours import nodes_that_heard_us, nodes_that_we_heard
from ...utils.nodes import format_node
from ..dependencies import get_db, get_enum_resolver, get_node
from ..schemas import (
    NODE_ERROR_RESPONSES,
    NeighboursResponse,
    NodeDetailResponse,
    NodeListResponse,
    NodeResponse,
)

router = APIRouter()


@router.get(
    "/nodes",
    response_model=NodeListResponse,
    summary="List all nodes",
    description="Get every known node with its hex id and hardware/role/region/modem names",
)
def list_nodes(
    db: Session = Depends(get_db),
    resolver: EnumResolver = Depends(get_enum_resolver),
) -> NodeListResponse:
    """
    List all nodes.

    Args:
        db: Database session
        resolver: Enum tables for name enrichment

    Returns:
        All nodes in insertion order
    """
    nodes = db.query(Node).order_by(Node.id).all()

    return NodeListResponse(
        nodes=[NodeResponse.model_validate(format_node(node, resolver)) for node in nodes],
    )


@router.get(
    "/nodes/{node_id}",
    response_model=NodeDetailResponse,
    summary="Get a node",
    responses=NODE_ERROR_RESPONSES,
)
def get_node_detail(
    node: Node = Depends(get_node),
    resolver: EnumResolver = Depends(get_enum_resolver),
) -> NodeDetailResponse:
    """Get a single node by numeric node id."""
    return NodeDetailResponse(node=NodeResponse.model_validate(format_node(node, resolver)))


@router.get(
    "/nodes/{node_id}/neighbours",
    response_model=NeighboursResponse,
    summary="Get neighbours of a node",
    description=(
        "Nodes this node reported hearing, and nodes whose own neighbour "
        "reports include this node"
    ),
    responses=NODE_ERROR_RESPONSES,
)
def get_node_neighbours(
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> NeighboursResponse:
    """
    Get both directions of a node's neighbour relationships.

    Args:
        node: Node resolved from the path
        db: Database session

    Returns:
        nodes_that_we_heard from the node's own report, and nodes_that_heard_us
        with the SNR each reporter measured
    """
    candidates = Node.find_neighbour_candidates(db, node.node_id)

    return NeighboursResponse(
        nodes_that_we_heard=nodes_that_we_heard(node),
        nodes_that_heard_us=nodes_that_heard_us(node.node_id, candidates),
    )
