"""Database layer for Meshtastic telemetry reads."""

from .engine import DatabaseEngine, close_database, get_database, init_database, session_scope
from .models import (
    Base,
    DeviceMetric,
    EnvironmentMetric,
    Node,
    PowerMetric,
    ServiceEnvelope,
    TextMessage,
    Traceroute,
    Waypoint,
)

__all__ = [
    "DatabaseEngine",
    "init_database",
    "get_database",
    "close_database",
    "session_scope",
    "Base",
    "Node",
    "DeviceMetric",
    "EnvironmentMetric",
    "PowerMetric",
    "ServiceEnvelope",
    "TextMessage",
    "Traceroute",
    "Waypoint",
]
