"""Unit tests for node formatting helpers."""

import pytest

from meshtastic_map.protobufs import EnumResolver
from meshtastic_map.utils.nodes import format_node, node_id_hex


@pytest.fixture
def resolver():
    return EnumResolver(
        hardware_models={9: "RAK4631"},
        roles={2: "ROUTER"},
        regions={3: "EU_868"},
        modem_presets={0: "LONG_FAST"},
    )


class TestNodeIdHex:
    """Test node_id_hex function."""

    @pytest.mark.parametrize(
        "node_id, expected",
        [
            (0, "!0"),
            (15, "!f"),
            (255, "!ff"),
            (2882400004, "!abcdef04"),
            (2882396420, "!abcde104"),
            (4294967295, "!ffffffff"),
            (0x0A1B2C, "!a1b2c"),
        ],
    )
    def test_hex_format(self, node_id, expected):
        """Test lowercase hex without padding or 0x prefix."""
        assert node_id_hex(node_id) == expected

    def test_matches_builtin_hex(self):
        """Test agreement with Python's own base-16 rendering."""
        for node_id in (1, 16, 4096, 123456789, 2**40 + 7):
            assert node_id_hex(node_id) == "!" + hex(node_id)[2:]


class TestFormatNode:
    """Test format_node function."""

    def test_adds_derived_fields(self, resolver, make_node):
        """Test hex id and enum names are attached."""
        node = make_node(2882400004, hardware_model=9, role=2, region=3, modem_preset=0)

        data = format_node(node, resolver)

        assert data["node_id"] == 2882400004
        assert data["node_id_hex"] == "!abcdef04"
        assert data["hardware_model_name"] == "RAK4631"
        assert data["role_name"] == "ROUTER"
        assert data["region_name"] == "EU_868"
        assert data["modem_preset_name"] == "LONG_FAST"

    def test_keeps_original_columns(self, resolver, make_node):
        """Test the node's own columns pass through unchanged."""
        node = make_node(1, long_name="Base Camp", short_name="BC", battery_level=87)

        data = format_node(node, resolver)

        assert data["long_name"] == "Base Camp"
        assert data["short_name"] == "BC"
        assert data["battery_level"] == 87
        assert data["hardware_model"] == 0

    def test_unknown_codes_resolve_to_none(self, resolver, make_node):
        """Test unrecognized enum codes do not raise."""
        node = make_node(1, hardware_model=9999, role=77, region=55, modem_preset=42)

        data = format_node(node, resolver)

        assert data["hardware_model_name"] is None
        assert data["role_name"] is None
        assert data["region_name"] is None
        assert data["modem_preset_name"] is None

    def test_missing_optional_codes(self, resolver):
        """Test a mapping without region or modem preset."""
        data = format_node({"node_id": 10, "hardware_model": 9, "role": 2}, resolver)

        assert data["node_id_hex"] == "!a"
        assert data["hardware_model_name"] == "RAK4631"
        assert data["region_name"] is None
        assert data["modem_preset_name"] is None

    def test_does_not_mutate_input_mapping(self, resolver):
        """Test a new dictionary is returned."""
        record = {"node_id": 10, "hardware_model": 9, "role": 2}
        format_node(record, resolver)
        assert "node_id_hex" not in record
