"""Bluetooth UUID helpers and the iBBQ GATT layout.

Short 16/32-bit UUIDs expand into 128-bit values on top of the Bluetooth
SIG base UUID: ``uuid128 = (short << 96) + BASE_UUID``.
"""

from __future__ import annotations

from typing import Final

from ..exceptions import ParseUuidError

BASE_UUID: Final = 0x00000000_0000_1000_8000_00805F9B34FB

_UUID_PART_LENGTHS: Final = (8, 4, 4, 4, 12)


def uuid16_to_uuid128(uuid16: int) -> int:
    """Expand a 16-bit short UUID to its 128-bit value."""
    if not 0 <= uuid16 <= 0xFFFF:
        raise ValueError(f"UUID16 out of range: 0x{uuid16:x}")
    return (uuid16 << 96) + BASE_UUID


def uuid32_to_uuid128(uuid32: int) -> int:
    """Expand a 32-bit short UUID to its 128-bit value."""
    if not 0 <= uuid32 <= 0xFFFFFFFF:
        raise ValueError(f"UUID32 out of range: 0x{uuid32:x}")
    return (uuid32 << 96) + BASE_UUID


def uuid128_to_string(uuid128: int) -> str:
    """Format a 128-bit UUID in the hyphenated 8-4-4-4-12 form.

    Lowercase, matching what bleak reports for service and characteristic
    UUIDs.
    """
    return "{:08x}-{:04x}-{:04x}-{:04x}-{:012x}".format(
        uuid128 >> 96,
        (uuid128 >> 80) & 0xFFFF,
        (uuid128 >> 64) & 0xFFFF,
        (uuid128 >> 48) & 0xFFFF,
        uuid128 & 0xFFFFFFFFFFFF,
    )


def string_to_uuid128(text: str) -> int:
    """Parse a hyphenated UUID string into its 128-bit value.

    Raises:
        ParseUuidError: If a part is not hexadecimal or there are not
            exactly five parts
    """
    parts = text.split("-")
    try:
        values = [int(part, 16) for part in parts]
    except ValueError as e:
        raise ParseUuidError(f"Invalid hex in UUID {text!r}") from e

    if len(values) != len(_UUID_PART_LENGTHS):
        raise ParseUuidError(
            f"Expected {len(_UUID_PART_LENGTHS)} parts in UUID {text!r}, got {len(values)}"
        )

    return (
        (values[0] << 96)
        + (values[1] << 80)
        + (values[2] << 64)
        + (values[3] << 48)
        + values[4]
    )


def _short_uuid(uuid16: int) -> str:
    return uuid128_to_string(uuid16_to_uuid128(uuid16))


# https://gist.github.com/uucidl/b9c60b6d36d8080d085a8e3310621d64
SERVICE_UUID: Final = _short_uuid(0xFFF0)
SETTING_RESULT_UUID: Final = _short_uuid(0xFFF1)      # notify
ACCOUNT_AND_VERIFY_UUID: Final = _short_uuid(0xFFF2)  # write
HISTORY_DATA_UUID: Final = _short_uuid(0xFFF3)
REAL_TIME_DATA_UUID: Final = _short_uuid(0xFFF4)      # notify
SETTING_DATA_UUID: Final = _short_uuid(0xFFF5)        # write
