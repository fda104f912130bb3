"""Pydantic schemas for API responses."""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer

# Node ids are unsigned 32-bit but stored as BIGINT; JSON clients get strings
NodeNum = Annotated[int, PlainSerializer(lambda v: str(v), return_type=str, when_used="json")]


def from_field(**kwargs: Any) -> Any:
    """Field for the `from` column, which is `from_` on the model."""
    return Field(
        validation_alias=AliasChoices("from_", "from"),
        serialization_alias="from",
        **kwargs,
    )


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


# ============================================================================
# Common/Shared Schemas
# ============================================================================

class MessageResponse(BaseModel):
    """Standard error response."""

    message: str = Field(..., description="Error message")


class ValidationErrorResponse(MessageResponse):
    """Error response for rejected request parameters."""

    detail: List[dict] = Field(default_factory=list, description="Validation errors")


# OpenAPI error responses for routes taking a {node_id} path parameter
NODE_ERROR_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {
    400: {"model": ValidationErrorResponse},
    404: {"model": MessageResponse},
}


# ============================================================================
# Node Schemas
# ============================================================================

class NodeResponse(OrmModel):
    """A node with its hex id and resolved enum names."""

    id: int
    node_id: NodeNum
    node_id_hex: str
    long_name: Optional[str] = None
    short_name: Optional[str] = None
    hardware_model: int
    hardware_model_name: Optional[str] = None
    is_licensed: bool = False
    role: int
    role_name: Optional[str] = None
    latitude: Optional[int] = None
    longitude: Optional[int] = None
    altitude: Optional[int] = None
    position_precision: Optional[int] = None
    battery_level: Optional[int] = None
    voltage: Optional[float] = None
    channel_utilization: Optional[float] = None
    air_util_tx: Optional[float] = None
    uptime_seconds: Optional[int] = None
    temperature: Optional[float] = None
    relative_humidity: Optional[float] = None
    barometric_pressure: Optional[float] = None
    firmware_version: Optional[str] = None
    region: Optional[int] = None
    region_name: Optional[str] = None
    modem_preset: Optional[int] = None
    modem_preset_name: Optional[str] = None
    has_default_channel: Optional[bool] = None
    neighbour_broadcast_interval_secs: Optional[int] = None
    neighbours: Optional[List[Any]] = None
    neighbours_updated_at: Optional[datetime] = None
    mqtt_connection_state: Optional[str] = None
    mqtt_connection_state_updated_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class NodeListResponse(BaseModel):
    nodes: List[NodeResponse]


class NodeDetailResponse(BaseModel):
    node: NodeResponse


# ============================================================================
# Metrics Schemas
# ============================================================================

class DeviceMetricResponse(OrmModel):
    """Device telemetry snapshot."""

    id: int
    node_id: NodeNum
    battery_level: Optional[int] = None
    voltage: Optional[float] = None
    channel_utilization: Optional[float] = None
    air_util_tx: Optional[float] = None
    uptime_seconds: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class DeviceMetricListResponse(BaseModel):
    device_metrics: List[DeviceMetricResponse]


class EnvironmentMetricResponse(OrmModel):
    """Environment sensor snapshot."""

    id: int
    node_id: NodeNum
    temperature: Optional[float] = None
    relative_humidity: Optional[float] = None
    barometric_pressure: Optional[float] = None
    gas_resistance: Optional[float] = None
    voltage: Optional[float] = None
    current: Optional[float] = None
    iaq: Optional[int] = None
    wind_direction: Optional[int] = None
    wind_speed: Optional[float] = None
    wind_gust: Optional[float] = None
    wind_lull: Optional[float] = None
    created_at: datetime
    updated_at: datetime


class EnvironmentMetricListResponse(BaseModel):
    environment_metrics: List[EnvironmentMetricResponse]


class PowerMetricResponse(OrmModel):
    """Power monitor snapshot."""

    id: int
    node_id: NodeNum
    ch1_voltage: Optional[float] = None
    ch1_current: Optional[float] = None
    ch2_voltage: Optional[float] = None
    ch2_current: Optional[float] = None
    ch3_voltage: Optional[float] = None
    ch3_current: Optional[float] = None
    created_at: datetime
    updated_at: datetime


class PowerMetricListResponse(BaseModel):
    power_metrics: List[PowerMetricResponse]


class MqttMetricResponse(OrmModel):
    """Packets a gateway published to one MQTT topic."""

    mqtt_topic: str
    packet_count: int
    last_packet_at: Optional[datetime] = None


class MqttMetricListResponse(BaseModel):
    mqtt_metrics: List[MqttMetricResponse]


# ============================================================================
# Neighbour Schemas
# ============================================================================

class NeighbourResponse(BaseModel):
    """One side of a neighbour relationship."""

    # Stored neighbour entries may carry more than node_id/snr; pass them through
    model_config = ConfigDict(extra="allow")

    # Values are returned in the form they were stored, "2" stays a string
    node_id: Union[int, str]
    snr: Any = None
    updated_at: Optional[datetime] = None


class NeighboursResponse(BaseModel):
    nodes_that_we_heard: List[NeighbourResponse]
    nodes_that_heard_us: List[NeighbourResponse]


# ============================================================================
# Traceroute Schemas
# ============================================================================

class TracerouteResponse(OrmModel):
    """Traceroute packet."""

    id: int
    to: NodeNum
    from_: NodeNum = from_field()
    want_response: bool
    route: Optional[List[Any]] = None
    channel: Optional[int] = None
    packet_id: Optional[int] = None
    channel_id: Optional[str] = None
    gateway_id: Optional[NodeNum] = None
    created_at: datetime
    updated_at: datetime


class TracerouteListResponse(BaseModel):
    traceroutes: List[TracerouteResponse]


# ============================================================================
# Text Message Schemas
# ============================================================================

class TextMessageSummary(OrmModel):
    """Projection of a text message for per-node listings."""

    to: NodeNum
    from_: NodeNum = from_field()
    channel_id: Optional[str] = None
    text: str
    rx_time: int


class TextMessageResponse(TextMessageSummary):
    """Full text message row."""

    id: int
    channel: Optional[int] = None
    packet_id: Optional[int] = None
    gateway_id: Optional[NodeNum] = None
    rx_snr: Optional[float] = None
    rx_rssi: Optional[int] = None
    hop_limit: Optional[int] = None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Statistics Schemas
# ============================================================================

class HardwareModelStat(BaseModel):
    """Number of nodes reporting one hardware model."""

    count: int
    hardware_model: int
    hardware_model_name: Optional[str] = None


class HardwareModelStatsResponse(BaseModel):
    hardware_model_stats: List[HardwareModelStat]


# ============================================================================
# Waypoint Schemas
# ============================================================================

class WaypointResponse(OrmModel):
    """Waypoint broadcast."""

    id: int
    to: NodeNum
    from_: NodeNum = from_field()
    waypoint_id: int
    latitude: int
    longitude: int
    expire: int
    locked_to: Optional[NodeNum] = None
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[int] = None
    channel: Optional[int] = None
    packet_id: Optional[int] = None
    channel_id: Optional[str] = None
    gateway_id: Optional[NodeNum] = None
    created_at: datetime
    updated_at: datetime


class WaypointListResponse(BaseModel):
    waypoints: List[WaypointResponse]
