"""Fixed-point temperature codec.

Temperatures travel as a little-endian signed 16-bit integer holding
degrees Celsius multiplied by 10.
"""

from __future__ import annotations

import struct
from typing import Final

from ..exceptions import TemperatureEncodingError

_TEMPERATURE_FORMAT: Final = "<h"

TEMPERATURE_MAX: Final = 32767 / 10
TEMPERATURE_MIN: Final = -32768 / 10

# Reported by the device for a disconnected probe (wire value -10)
ABSENT_PROBE_VALUE: Final = -1.0
# Lower bound of a target range meaning "no lower bound"
TARGET_TEMP_NONE: Final = -300.0


def encode_temperature(temperature: float) -> bytes:
    """Encode a Celsius temperature as 2 wire bytes.

    The value is scaled by 10 and truncated toward zero. The scaled value
    is first rounded to 6 decimal places, so tenths such as 51.3 encode
    exactly even though their binary float lies just below. Inputs within
    1e-7 below a tenth, such as 0.09999999999, encode as that tenth.

    Args:
        temperature: Temperature in degrees Celsius

    Returns:
        2 bytes, little-endian int16

    Raises:
        TemperatureEncodingError: If temperature is outside
            [TEMPERATURE_MIN, TEMPERATURE_MAX]
    """
    if not TEMPERATURE_MIN <= temperature <= TEMPERATURE_MAX:
        raise TemperatureEncodingError(temperature)

    # Absorb binary float error (51.3 * 10 must give 513, not 512.99...)
    fixed = int(round(temperature * 10, 6))
    return struct.pack(_TEMPERATURE_FORMAT, fixed)


def decode_temperature(data: bytes) -> float:
    """Decode 2 wire bytes into degrees Celsius."""
    if len(data) != 2:
        raise ValueError(f"Temperature must be exactly 2 bytes, got {len(data)}")
    return struct.unpack(_TEMPERATURE_FORMAT, data)[0] / 10
