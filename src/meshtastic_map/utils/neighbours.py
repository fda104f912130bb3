"""Neighbour list reconciliation.

Each node self-reports the nodes it can hear directly, as a JSON array of
``{"node_id": ..., "snr": ...}`` stored on its own row. Who heard a node is
therefore only known by scanning other nodes' arrays.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..database.models import Node


def _is_node_num(value: Any) -> bool:
    """True for an int or a decimal string; bools and signed values are not node ids."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, str) and value.isascii() and value.isdigit()


def _entries(neighbours: Any) -> List[Mapping[str, Any]]:
    if not isinstance(neighbours, list):
        return []
    return [
        entry
        for entry in neighbours
        if isinstance(entry, Mapping) and _is_node_num(entry.get("node_id"))
    ]


def find_neighbour_entry(neighbours: Any, node_id: int) -> Optional[Mapping[str, Any]]:
    """
    Find the first entry in a neighbours array that refers to node_id.

    Ids are compared as decimal strings so 64-bit ids stored as JSON strings
    still match.
    """
    wanted = str(node_id)
    for entry in _entries(neighbours):
        if str(entry["node_id"]) == wanted:
            return entry
    return None


def nodes_that_we_heard(node: Node) -> List[Dict[str, Any]]:
    """
    The node's own neighbour report, each entry stamped with the report time.

    Args:
        node: Node whose neighbours array to expand

    Returns:
        List of neighbour dicts with an added updated_at
    """
    updated_at: Optional[datetime] = node.neighbours_updated_at
    return [{**entry, "updated_at": updated_at} for entry in _entries(node.neighbours)]


def nodes_that_heard_us(node_id: int, candidates: Iterable[Node]) -> List[Dict[str, Any]]:
    """
    Nodes whose neighbour report lists node_id.

    Args:
        node_id: Node id to look for
        candidates: Nodes to scan; non-matching ones are skipped

    Returns:
        List of {node_id, snr, updated_at} using each reporter's report time
    """
    results = []
    for candidate in candidates:
        entry = find_neighbour_entry(candidate.neighbours, node_id)
        if entry is None:
            continue
        results.append(
            {
                "node_id": int(candidate.node_id),
                "snr": entry.get("snr"),
                "updated_at": candidate.neighbours_updated_at,
            }
        )
    return results
