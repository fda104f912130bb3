"""Waypoint endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import desc
from sqlalchemy.orm import Session

from ...database.models import Waypoint
from ...utils.waypoints import latest_unexpired_waypoints
from ..dependencies import get_db
from ..schemas import WaypointListResponse

router = APIRouter()


@router.get(
    "/waypoints",
    response_model=WaypointListResponse,
    summary="List active waypoints",
    description="Latest version of each waypoint, excluding expired ones",
)
def list_waypoints(db: Session = Depends(get_db)) -> WaypointListResponse:
    """List the newest, unexpired row of each (from, waypoint_id)."""
    waypoints = db.query(Waypoint).order_by(desc(Waypoint.id)).all()

    return WaypointListResponse(waypoints=latest_unexpired_waypoints(waypoints))
