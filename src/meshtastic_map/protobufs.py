"""Meshtastic protobuf enum lookups.

Nodes store hardware model, role, region and modem preset as the raw integer
codes from the firmware's protobufs. The tables here are read from the compiled
descriptors shipped with the ``meshtastic`` package and never change after
startup.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from google.protobuf.internal.enum_type_wrapper import EnumTypeWrapper
from meshtastic.protobuf import config_pb2, mesh_pb2

logger = logging.getLogger(__name__)


def _enum_table(enum_type: EnumTypeWrapper) -> Mapping[int, str]:
    """Build a read-only code -> name table from a protobuf enum."""
    return MappingProxyType(
        {number: value.name for number, value in enum_type.DESCRIPTOR.values_by_number.items()}
    )


def _lookup(table: Mapping[int, str], code: Any) -> Optional[str]:
    if code is None or isinstance(code, bool):
        return None
    try:
        return table.get(int(code))
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class EnumResolver:
    """Immutable enum-code to name tables for node attributes."""

    hardware_models: Mapping[int, str]
    roles: Mapping[int, str]
    regions: Mapping[int, str]
    modem_presets: Mapping[int, str]

    def hardware_model_name(self, code: Any) -> Optional[str]:
        return _lookup(self.hardware_models, code)

    def role_name(self, code: Any) -> Optional[str]:
        return _lookup(self.roles, code)

    def region_name(self, code: Any) -> Optional[str]:
        return _lookup(self.regions, code)

    def modem_preset_name(self, code: Any) -> Optional[str]:
        return _lookup(self.modem_presets, code)


def load_enum_resolver() -> EnumResolver:
    """
    Load enum tables from the Meshtastic protobuf descriptors.

    Returns:
        EnumResolver instance

    Raises:
        RuntimeError: If any of the enums is missing or empty
    """
    sources = {
        "hardware_models": mesh_pb2.HardwareModel,
        "roles": config_pb2.Config.DeviceConfig.Role,
        "regions": config_pb2.Config.LoRaConfig.RegionCode,
        "modem_presets": config_pb2.Config.LoRaConfig.ModemPreset,
    }

    tables = {}
    for field_name, enum_type in sources.items():
        table = _enum_table(enum_type)
        if not table:
            raise RuntimeError(f"Protobuf enum {enum_type.DESCRIPTOR.full_name} has no values")
        tables[field_name] = table

    logger.debug(
        "Loaded protobuf enums: "
        + ", ".join(f"{name}={len(table)}" for name, table in tables.items())
    )
    return EnumResolver(**tables)
