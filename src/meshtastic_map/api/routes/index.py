"""API index page."""

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

ENDPOINTS = [
    ("/api", "This page"),
    ("/api/v1/nodes", "Meshtastic nodes in JSON format."),
    ("/api/v1/nodes/{node_id}", "A single node in JSON format."),
    ("/api/v1/nodes/{node_id}/device-metrics", "Device metrics for a node, newest first. Supports ?count=N."),
    ("/api/v1/nodes/{node_id}/environment-metrics", "Environment metrics for a node, newest first. Supports ?count=N."),
    ("/api/v1/nodes/{node_id}/power-metrics", "Power metrics for a node, newest first. Supports ?count=N."),
    ("/api/v1/nodes/{node_id}/mqtt-metrics", "MQTT topics this node has gatewayed packets to."),
    ("/api/v1/nodes/{node_id}/neighbours", "Nodes this node heard, and nodes that heard it."),
    ("/api/v1/nodes/{node_id}/traceroutes", "Traceroute replies for a node. Supports ?count=N (default 10)."),
    ("/api/v1/nodes/{node_id}/messages", "Text messages sent to a node, newest first. Supports ?count=N."),
    ("/api/v1/stats/hardware-models", "Database statistics about hardware models in JSON format."),
    ("/api/v1/waypoints", "Meshtastic waypoints in JSON format."),
    ("/api/v1/latest-messages", "Latest text message per recipient in JSON format."),
]


def render_index() -> str:
    """Render the endpoint list as HTML list items."""
    return "".join(
        f'<li><a href="{escape(path)}">{escape(path)}</a> - {escape(description)}</li>'
        for path, description in ENDPOINTS
    )


@router.get("/api", response_class=HTMLResponse, include_in_schema=False)
def api_index() -> str:
    """List the available endpoints."""
    return render_index()
