"""Network statistics endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from ...database.models import Node
from ...protobufs import EnumResolver
from ..dependencies import get_db, get_enum_resolver
from ..schemas import HardwareModelStat, HardwareModelStatsResponse

router = APIRouter()


@router.get(
    "/stats/hardware-models",
    response_model=HardwareModelStatsResponse,
    summary="Get hardware model statistics",
    description="Number of nodes per hardware model, most common first",
)
def get_hardware_model_stats(
    db: Session = Depends(get_db),
    resolver: EnumResolver = Depends(get_enum_resolver),
) -> HardwareModelStatsResponse:
    """
    Count nodes by hardware model.

    Args:
        db: Database session
        resolver: Enum tables for the model names

    Returns:
        One entry per hardware model code, ordered by count descending
    """
    node_count = func.count(Node.hardware_model).label("count")

    rows = (
        db.query(Node.hardware_model, node_count)
        .group_by(Node.hardware_model)
        .order_by(desc(node_count), Node.hardware_model)
        .all()
    )

    return HardwareModelStatsResponse(
        hardware_model_stats=[
            HardwareModelStat(
                count=count,
                hardware_model=hardware_model,
                hardware_model_name=resolver.hardware_model_name(hardware_model),
            )
            for hardware_model, count in rows
        ],
    )
