"""Events decoded from device notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class RealTimeData:
    """A reading of every probe slot on the device.

    Attributes:
        probe_temperatures: Temperature of each probe in degrees Celsius, in
            the order the device reports them. ``None`` means the probe is
            disconnected.
    """

    probe_temperatures: tuple[float | None, ...]

    @property
    def probe_count(self) -> int:
        """Number of probe slots reported, connected or not."""
        return len(self.probe_temperatures)

    @property
    def connected_probes(self) -> dict[int, float]:
        """Map of probe index to temperature for connected probes only."""
        return {
            index: temperature
            for index, temperature in enumerate(self.probe_temperatures)
            if temperature is not None
        }


@dataclass(frozen=True, slots=True)
class AcknowledgeCommand:
    """The device received the command with the given opcode."""

    command_id: int


@dataclass(frozen=True, slots=True)
class BatteryLevel:
    """Battery voltage report, sent in reply to a battery level request."""

    current_voltage: int
    max_voltage: int


@dataclass(frozen=True, slots=True)
class SilencePressed:
    """The button on the device was pressed to silence the target alarm."""


SettingResult = Union[AcknowledgeCommand, BatteryLevel, SilencePressed]
