"""Meshtastic Map API - read-only REST API for Meshtastic mesh telemetry."""

__version__ = "1.0.0"
