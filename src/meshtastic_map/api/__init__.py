"""REST API for Meshtastic telemetry."""

from .app import create_app

__all__ = ["create_app"]
