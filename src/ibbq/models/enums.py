from __future__ import annotations

from enum import IntEnum


class TemperatureUnit(IntEnum):
    """Display unit on the thermometer.

    Only affects the device screen. Temperatures on the wire are always
    Celsius.
    """
    CELSIUS = 0
    FAHRENHEIT = 1


class SettingResultType(IntEnum):
    """First byte of a setting result notification."""
    SILENCE_PRESSED = 0x04
    BATTERY_LEVEL = 0x24
    ACKNOWLEDGE_COMMAND = 0xFF
