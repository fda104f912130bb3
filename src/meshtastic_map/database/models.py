"""SQLAlchemy database models for Meshtastic telemetry."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    Float,
    Integer,
    LargeBinary,
    String,
    Text,
    cast,
    func,
    inspect,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

# Row ids are BIGINT upstream, SQLite only autoincrements INTEGER primary keys
RowId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Base class for all database models."""

    def to_dict(self) -> Dict[str, Any]:
        """Return column values keyed by attribute name."""
        return {attr.key: getattr(self, attr.key) for attr in inspect(self).mapper.column_attrs}


class Node(Base):
    """A Meshtastic node as last reported over MQTT."""

    __tablename__ = "nodes"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    node_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False, index=True)
    long_name: Mapped[Optional[str]] = mapped_column(String(255))
    short_name: Mapped[Optional[str]] = mapped_column(String(255))
    hardware_model: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_licensed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    role: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Position (degrees * 1e7)
    latitude: Mapped[Optional[int]] = mapped_column(Integer)
    longitude: Mapped[Optional[int]] = mapped_column(Integer)
    altitude: Mapped[Optional[int]] = mapped_column(Integer)
    position_precision: Mapped[Optional[int]] = mapped_column(Integer)

    # Latest device metrics
    battery_level: Mapped[Optional[int]] = mapped_column(Integer)
    voltage: Mapped[Optional[float]] = mapped_column(Float)
    channel_utilization: Mapped[Optional[float]] = mapped_column(Float)
    air_util_tx: Mapped[Optional[float]] = mapped_column(Float)
    uptime_seconds: Mapped[Optional[int]] = mapped_column(BigInteger)

    # Latest environment metrics
    temperature: Mapped[Optional[float]] = mapped_column(Float)
    relative_humidity: Mapped[Optional[float]] = mapped_column(Float)
    barometric_pressure: Mapped[Optional[float]] = mapped_column(Float)

    # Map report
    firmware_version: Mapped[Optional[str]] = mapped_column(String(255))
    region: Mapped[Optional[int]] = mapped_column(Integer)
    modem_preset: Mapped[Optional[int]] = mapped_column(Integer)
    has_default_channel: Mapped[Optional[bool]] = mapped_column(Boolean)

    neighbour_broadcast_interval_secs: Mapped[Optional[int]] = mapped_column(Integer)
    neighbours: Mapped[Optional[List[Dict[str, Any]]]] = mapped_column(JSON)  # [{node_id, snr}]
    neighbours_updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    mqtt_connection_state: Mapped[Optional[str]] = mapped_column(String(255))
    mqtt_connection_state_updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    @classmethod
    def find_by_node_id(cls, session: Session, node_id: int) -> Optional["Node"]:
        """Find a node by its numeric node id."""
        return session.query(cls).filter(cls.node_id == node_id).first()

    @classmethod
    def find_neighbour_candidates(cls, session: Session, node_id: int) -> List["Node"]:
        """
        Find nodes whose neighbours JSON mentions the given node id.

        This is a coarse text match on the serialized array and returns a
        superset; callers must check each entry's node_id exactly.
        """
        return (
            session.query(cls)
            .filter(cast(cls.neighbours, Text).contains(str(node_id)))
            .order_by(cls.node_id)
            .all()
        )


class DeviceMetric(Base):
    """Device telemetry snapshot (battery, channel utilization, uptime)."""

    __tablename__ = "device_metrics"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    node_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    battery_level: Mapped[Optional[int]] = mapped_column(Integer)
    voltage: Mapped[Optional[float]] = mapped_column(Float)
    channel_utilization: Mapped[Optional[float]] = mapped_column(Float)
    air_util_tx: Mapped[Optional[float]] = mapped_column(Float)
    uptime_seconds: Mapped[Optional[int]] = mapped_column(BigInteger)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())


class EnvironmentMetric(Base):
    """Environment sensor snapshot."""

    __tablename__ = "environment_metrics"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    node_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    temperature: Mapped[Optional[float]] = mapped_column(Float)
    relative_humidity: Mapped[Optional[float]] = mapped_column(Float)
    barometric_pressure: Mapped[Optional[float]] = mapped_column(Float)
    gas_resistance: Mapped[Optional[float]] = mapped_column(Float)
    voltage: Mapped[Optional[float]] = mapped_column(Float)
    current: Mapped[Optional[float]] = mapped_column(Float)
    iaq: Mapped[Optional[int]] = mapped_column(Integer)
    wind_direction: Mapped[Optional[int]] = mapped_column(Integer)
    wind_speed: Mapped[Optional[float]] = mapped_column(Float)
    wind_gust: Mapped[Optional[float]] = mapped_column(Float)
    wind_lull: Mapped[Optional[float]] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())


class PowerMetric(Base):
    """Power monitor snapshot for up to three channels."""

    __tablename__ = "power_metrics"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    node_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    ch1_voltage: Mapped[Optional[float]] = mapped_column(Float)
    ch1_current: Mapped[Optional[float]] = mapped_column(Float)
    ch2_voltage: Mapped[Optional[float]] = mapped_column(Float)
    ch2_current: Mapped[Optional[float]] = mapped_column(Float)
    ch3_voltage: Mapped[Optional[float]] = mapped_column(Float)
    ch3_current: Mapped[Optional[float]] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())


class ServiceEnvelope(Base):
    """Raw packet as observed on an MQTT topic."""

    __tablename__ = "service_envelopes"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    mqtt_topic: Mapped[str] = mapped_column(String(255), nullable=False)
    channel_id: Mapped[Optional[str]] = mapped_column(String(255))
    gateway_id: Mapped[Optional[int]] = mapped_column(BigInteger, index=True)
    to: Mapped[int] = mapped_column(BigInteger, nullable=False)
    from_: Mapped[int] = mapped_column("from", BigInteger, nullable=False)
    protobuf: Mapped[Optional[bytes]] = mapped_column(LargeBinary)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())


class TextMessage(Base):
    """Text message packet."""

    __tablename__ = "text_messages"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    to: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    from_: Mapped[int] = mapped_column("from", BigInteger, nullable=False, index=True)
    channel: Mapped[Optional[int]] = mapped_column(Integer)
    packet_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    channel_id: Mapped[Optional[str]] = mapped_column(String(255))
    gateway_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    rx_time: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)  # unix seconds
    rx_snr: Mapped[Optional[float]] = mapped_column(Float)
    rx_rssi: Mapped[Optional[int]] = mapped_column(Integer)
    hop_limit: Mapped[Optional[int]] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())


class Traceroute(Base):
    """Traceroute request or reply packet."""

    __tablename__ = "traceroutes"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    to: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    from_: Mapped[int] = mapped_column("from", BigInteger, nullable=False, index=True)
    want_response: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    route: Mapped[Optional[List[int]]] = mapped_column(JSON)  # node ids along the path
    channel: Mapped[Optional[int]] = mapped_column(Integer)
    packet_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    channel_id: Mapped[Optional[str]] = mapped_column(String(255))
    gateway_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())


class Waypoint(Base):
    """Waypoint broadcast; (from, waypoint_id) identifies the logical waypoint."""

    __tablename__ = "waypoints"

    id: Mapped[int] = mapped_column(RowId, primary_key=True, autoincrement=True)
    to: Mapped[int] = mapped_column(BigInteger, nullable=False)
    from_: Mapped[int] = mapped_column("from", BigInteger, nullable=False, index=True)
    waypoint_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    latitude: Mapped[int] = mapped_column(Integer, nullable=False)
    longitude: Mapped[int] = mapped_column(Integer, nullable=False)
    expire: Mapped[int] = mapped_column(BigInteger, nullable=False)  # unix seconds
    locked_to: Mapped[Optional[int]] = mapped_column(BigInteger)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    icon: Mapped[Optional[int]] = mapped_column(Integer)
    channel: Mapped[Optional[int]] = mapped_column(Integer)
    packet_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    channel_id: Mapped[Optional[str]] = mapped_column(String(255))
    gateway_id: Mapped[Optional[int]] = mapped_column(BigInteger)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())
