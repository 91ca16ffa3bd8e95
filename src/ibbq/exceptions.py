"""Exceptions raised by the iBBQ package."""

from __future__ import annotations


class IBBQError(Exception):
    """Base class for all iBBQ errors."""


class BLEConnectionError(IBBQError):
    """Raised when the BLE transport fails.

    Covers device lookup, connecting, GATT resolution, writes and
    notification setup.
    """


class BLETimeoutError(IBBQError):
    """Raised when a BLE operation times out."""


class TemperatureEncodingError(IBBQError, ValueError):
    """Raised when a temperature cannot be represented on the wire."""

    def __init__(self, temperature: float):
        super().__init__(f"Temperature {temperature} out of range")
        self.temperature = temperature


class ParseUuidError(IBBQError, ValueError):
    """Raised when a UUID string cannot be parsed."""
