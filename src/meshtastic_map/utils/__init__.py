"""Utility functions and helpers."""

from .logging import setup_logging
from .neighbours import find_neighbour_entry, nodes_that_heard_us, nodes_that_we_heard
from .nodes import format_node, node_id_hex
from .waypoints import latest_unexpired_waypoints

__all__ = [
    "setup_logging",
    "format_node",
    "node_id_hex",
    "find_neighbour_entry",
    "nodes_that_we_heard",
    "nodes_that_heard_us",
    "latest_unexpired_waypoints",
]
