"""Node formatting helpers."""

from typing import Any, Dict, Mapping, Union

from ..database.models import Node
from ..protobufs import EnumResolver


def node_id_hex(node_id: int) -> str:
    """
    Format a numeric node id the way Meshtastic clients display it.

    Args:
        node_id: Numeric node id

    Returns:
        "!" followed by the lowercase hex digits, e.g. 2882400004 -> "!abcdef04"
    """
    return "!" + format(int(node_id), "x")


def format_node(node: Union[Node, Mapping[str, Any]], resolver: EnumResolver) -> Dict[str, Any]:
    """
    Decorate a node record with its hex id and resolved enum names.

    Unknown or missing enum codes resolve to None; this never raises for
    a record that has a node_id.

    Args:
        node: Node model or mapping of its column values
        resolver: Enum tables loaded at startup

    Returns:
        Dictionary of the node's columns plus node_id_hex, hardware_model_name,
        role_name, region_name and modem_preset_name
    """
    data = node.to_dict() if isinstance(node, Node) else dict(node)

    data["node_id_hex"] = node_id_hex(data["node_id"])
    data["hardware_model_name"] = resolver.hardware_model_name(data.get("hardware_model"))
    data["role_name"] = resolver.role_name(data.get("role"))
    data["region_name"] = resolver.region_name(data.get("region"))
    data["modem_preset_name"] = resolver.modem_preset_name(data.get("modem_preset"))
    return data
