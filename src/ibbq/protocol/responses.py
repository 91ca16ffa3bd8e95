"""Notification payload parsing.

Both parsers are total: malformed or unknown payloads return None and are
logged rather than raised, since notification streams have nowhere to
report a per-item failure.
"""

from __future__ import annotations

import logging
import struct
from typing import Final

from ..models.enums import SettingResultType
from ..models.events import (
    AcknowledgeCommand,
    BatteryLevel,
    RealTimeData,
    SettingResult,
    SilencePressed,
)
from .temperature import ABSENT_PROBE_VALUE, decode_temperature

_LOGGER = logging.getLogger(__name__)

SETTING_RESULT_LENGTH: Final = 6

_ACKNOWLEDGE_PADDING: Final = b"\x00\x00\x00\x00"
_SILENCE_PATTERN: Final = b"\xff\x00\x00\x00\x00"


def parse_real_time(data: bytes) -> RealTimeData | None:
    """Parse a real-time data notification.

    Format: [probe0:2 LE][probe1:2 LE]... one int16 per probe slot.

    Args:
        data: Raw notification value

    Returns:
        RealTimeData (empty for an empty payload), or None if the payload
        has an odd length
    """
    if len(data) % 2 != 0:
        _LOGGER.warning("Discarding odd-length real-time data: %s", data.hex())
        return None

    temperatures: list[float | None] = []
    for offset in range(0, len(data), 2):
        temperature = decode_temperature(data[offset:offset + 2])
        temperatures.append(None if temperature == ABSENT_PROBE_VALUE else temperature)

    return RealTimeData(probe_temperatures=tuple(temperatures))


def parse_setting_result(data: bytes) -> SettingResult | None:
    """Parse a setting result notification.

    Format: [tag:1][fields:5]
        - 0xFF: [command_id:1][0:4]               acknowledge
        - 0x24: [current:2 LE][max:2 LE][0:1]     battery level
        - 0x04: [0xFF][0:4]                       silence pressed

    Args:
        data: Raw notification value

    Returns:
        The decoded setting result, or None if the payload is the wrong
        length, has an unknown tag, or has unexpected padding
    """
    if len(data) != SETTING_RESULT_LENGTH:
        _LOGGER.warning(
            "Discarding setting result of %d bytes (need %d): %s",
            len(data),
            SETTING_RESULT_LENGTH,
            data.hex(),
        )
        return None

    tag = data[0]

    if tag == SettingResultType.ACKNOWLEDGE_COMMAND:
        if data[2:] != _ACKNOWLEDGE_PADDING:
            _LOGGER.warning("Unexpected padding in acknowledgement: %s", data.hex())
            return None
        return AcknowledgeCommand(command_id=data[1])

    if tag == SettingResultType.BATTERY_LEVEL:
        current_voltage, max_voltage = struct.unpack("<HH", data[1:5])
        return BatteryLevel(current_voltage=current_voltage, max_voltage=max_voltage)

    if tag == SettingResultType.SILENCE_PRESSED:
        if data[1:] != _SILENCE_PATTERN:
            _LOGGER.warning("Unexpected pattern in silence notification: %s", data.hex())
            return None
        return SilencePressed()

    _LOGGER.info("Unrecognised setting result: %s", data.hex())
    return None
