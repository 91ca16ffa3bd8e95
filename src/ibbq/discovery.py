"""Discovery of iBBQ thermometers."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Final

from bleak import BleakScanner

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)

DEVICE_NAMES: Final = ("BBQ", "iBBQ")


def is_compatible(name: str | None) -> bool:
    """Return whether an advertised name belongs to an iBBQ thermometer."""
    return name in DEVICE_NAMES


async def discover_devices(
        timeout: float = 10.0,
        scanner: BleakScanner | None = None,
) -> list[BLEDevice]:
    """Scan for iBBQ thermometers.

    Args:
        timeout: Scan duration in seconds (default: 10)
        scanner: Optional scanner that is already running; its discovered
            devices are read after waiting for timeout

    Returns:
        Compatible devices seen during the scan
    """
    _LOGGER.debug("Looking for iBBQ devices")
    if scanner is None:
        devices = await BleakScanner.discover(timeout=timeout)
    else:
        await asyncio.sleep(timeout)
        devices = scanner.discovered_devices

    found = []
    for device in devices:
        _LOGGER.debug("Found device with name: %s and address: %s", device.name, device.address)
        if is_compatible(device.name):
            found.append(device)
    return found
