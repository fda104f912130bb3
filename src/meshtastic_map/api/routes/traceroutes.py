"""Traceroute endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc
from sqlalchemy.orm import Session

from ...database.models import Node, Traceroute
from ..dependencies import get_db, get_node
from ..schemas import NODE_ERROR_RESPONSES, TracerouteListResponse

router = APIRouter()


@router.get(
    "/nodes/{node_id}/traceroutes",
    response_model=TracerouteListResponse,
    summary="Get traceroute replies for a node",
    description="Traceroute replies addressed to this node that reached MQTT through a gateway",
    responses=NODE_ERROR_RESPONSES,
)
def get_traceroutes(
    count: int = Query(10, ge=1, description="Maximum number of traceroutes to return"),
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> TracerouteListResponse:
    """
    Get the latest traceroute replies sent to a node.

    A reply is a traceroute packet with want_response unset, addressed to
    the node that requested it, and seen by a gateway.

    Args:
        count: Maximum number of rows (default 10)
        node: Node resolved from the path
        db: Database session

    Returns:
        Traceroutes, newest first
    """
    traceroutes = (
        db.query(Traceroute)
        .filter(Traceroute.want_response.is_(False))
        .filter(Traceroute.to == node.node_id)
        .filter(Traceroute.gateway_id.isnot(None))
        .order_by(desc(Traceroute.id))
        .limit(count)
        .all()
    )

    return TracerouteListResponse(traceroutes=traceroutes)
