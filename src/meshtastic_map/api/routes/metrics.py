"""Per-node telemetry and MQTT gateway endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from ...database.models import (
    DeviceMetric,
    EnvironmentMetric,
    Node,
    PowerMetric,
    ServiceEnvelope,
)
from ..dependencies import get_db, get_node
from ..schemas import (
    NODE_ERROR_RESPONSES,
    DeviceMetricListResponse,
    EnvironmentMetricListResponse,
    MqttMetricListResponse,
    MqttMetricResponse,
    PowerMetricListResponse,
)

router = APIRouter()

COUNT_DESCRIPTION = "Maximum number of records to return, newest first (default: all)"


def latest_metrics(db: Session, model, node_id: int, count: Optional[int]) -> list:
    """
    Fetch metric rows for a node, highest id first.

    Args:
        db: Database session
        model: Metric model class with node_id and id columns
        node_id: Node id to filter on
        count: Row limit, or None for all rows

    Returns:
        List of model instances
    """
    query = db.query(model).filter(model.node_id == node_id).order_by(desc(model.id))
    if count is not None:
        query = query.limit(count)
    return query.all()


@router.get(
    "/nodes/{node_id}/device-metrics",
    response_model=DeviceMetricListResponse,
    summary="Get device metrics for a node",
    responses=NODE_ERROR_RESPONSES,
)
def get_device_metrics(
    count: Optional[int] = Query(None, ge=1, description=COUNT_DESCRIPTION),
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> DeviceMetricListResponse:
    """Battery, voltage, channel utilization and uptime history."""
    return DeviceMetricListResponse(
        device_metrics=latest_metrics(db, DeviceMetric, node.node_id, count),
    )


@router.get(
    "/nodes/{node_id}/environment-metrics",
    response_model=EnvironmentMetricListResponse,
    summary="Get environment metrics for a node",
    responses=NODE_ERROR_RESPONSES,
)
def get_environment_metrics(
    count: Optional[int] = Query(None, ge=1, description=COUNT_DESCRIPTION),
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> EnvironmentMetricListResponse:
    """Temperature, humidity, pressure and other sensor history."""
    return EnvironmentMetricListResponse(
        environment_metrics=latest_metrics(db, EnvironmentMetric, node.node_id, count),
    )


@router.get(
    "/nodes/{node_id}/power-metrics",
    response_model=PowerMetricListResponse,
    summary="Get power metrics for a node",
    responses=NODE_ERROR_RESPONSES,
)
def get_power_metrics(
    count: Optional[int] = Query(None, ge=1, description=COUNT_DESCRIPTION),
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> PowerMetricListResponse:
    """Per-channel voltage and current history."""
    return PowerMetricListResponse(
        power_metrics=latest_metrics(db, PowerMetric, node.node_id, count),
    )


@router.get(
    "/nodes/{node_id}/mqtt-metrics",
    response_model=MqttMetricListResponse,
    summary="Get MQTT topics a node has published to",
    description="Packet count and last packet time per MQTT topic, for packets this node gatewayed",
    responses=NODE_ERROR_RESPONSES,
)
def get_mqtt_metrics(
    node: Node = Depends(get_node),
    db: Session = Depends(get_db),
) -> MqttMetricListResponse:
    """
    Aggregate service envelopes gatewayed by a node per MQTT topic.

    Args:
        node: Node resolved from the path
        db: Database session

    Returns:
        One entry per topic, busiest topic first
    """
    packet_count = func.count(ServiceEnvelope.id).label("packet_count")
    last_packet_at = func.max(ServiceEnvelope.created_at).label("last_packet_at")

    rows = (
        db.query(ServiceEnvelope.mqtt_topic, packet_count, last_packet_at)
        .filter(ServiceEnvelope.gateway_id == node.node_id)
        .group_by(ServiceEnvelope.mqtt_topic)
        .order_by(desc(packet_count), ServiceEnvelope.mqtt_topic)
        .all()
    )

    return MqttMetricListResponse(
        mqtt_metrics=[MqttMetricResponse.model_validate(row) for row in rows],
    )
