"""BLE protocol commands for iBBQ thermometers.

Every command is a fixed 6-byte packet written to the setting-data
characteristic: ``[opcode][args...]`` zero-padded. Authentication is the
exception, a fixed 15-byte blob written to account-and-verify.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from ..models.enums import TemperatureUnit
from .temperature import TARGET_TEMP_NONE, encode_temperature


class CommandCode(IntEnum):
    """Opcodes for the first byte of setting data."""

    SET_TARGET_TEMP = 0x01
    SET_UNIT = 0x02
    REQUEST_PROPERTY = 0x08
    REAL_TIME_DATA = 0x0B


class PropertyId(IntEnum):
    """Properties that can be requested with REQUEST_PROPERTY."""

    BATTERY_LEVEL = 0x24


COMMAND_LENGTH: Final = 6

CREDENTIAL_MSG: Final = bytes([
    0x21, 0x07, 0x06, 0x05, 0x04, 0x03, 0x02, 0x01,
    0xB8, 0x22, 0x00, 0x00, 0x00, 0x00, 0x00,
])


def _build_command(code: CommandCode, *args: int) -> bytes:
    """Pack opcode and arguments, zero-padded to COMMAND_LENGTH."""
    packet = bytes([code, *args])
    return packet.ljust(COMMAND_LENGTH, b"\x00")


def build_credential_command() -> bytes:
    """Build the authentication packet.

    Returns:
        The 15-byte credential blob
    """
    return CREDENTIAL_MSG


def build_set_unit_command(unit: TemperatureUnit) -> bytes:
    """Build command to change the display unit.

    Returns:
        Command bytes: [0x02, unit, 0, 0, 0, 0]
    """
    return _build_command(CommandCode.SET_UNIT, TemperatureUnit(unit))


def build_real_time_data_command(enable: bool) -> bytes:
    """Build command to start or stop real-time probe data.

    Returns:
        Command bytes: [0x0B, 1 or 0, 0, 0, 0, 0]
    """
    return _build_command(CommandCode.REAL_TIME_DATA, 0x01 if enable else 0x00)


def build_request_property_command(property_id: PropertyId | int) -> bytes:
    """Build command asking the device to report a property.

    Returns:
        Command bytes: [0x08, property_id, 0, 0, 0, 0]
    """
    return _build_command(CommandCode.REQUEST_PROPERTY, property_id)


def build_request_battery_level_command() -> bytes:
    """Build command asking for the battery level.

    The reply arrives as a BatteryLevel setting result.
    """
    return build_request_property_command(PropertyId.BATTERY_LEVEL)


def build_set_target_range_command(
        probe: int,
        low: float | None,
        high: float,
) -> bytes:
    """Build command to set the alarm range for a probe.

    Args:
        probe: Probe index, forwarded as-is
        low: Lower bound in Celsius, or None for no lower bound
        high: Upper bound in Celsius

    Returns:
        Command bytes: [0x01, probe, low:2 LE, high:2 LE]

    Raises:
        TemperatureEncodingError: If either bound is out of range
    """
    low_bytes = encode_temperature(TARGET_TEMP_NONE if low is None else low)
    high_bytes = encode_temperature(high)
    return _build_command(CommandCode.SET_TARGET_TEMP, probe, *low_bytes, *high_bytes)


def build_set_target_temp_command(probe: int, target: float) -> bytes:
    """Build command to alarm once a probe goes above target."""
    return build_set_target_range_command(probe, None, target)
