"""Data models for iBBQ thermometers."""

from .enums import SettingResultType, TemperatureUnit
from .events import (
    AcknowledgeCommand,
    BatteryLevel,
    RealTimeData,
    SettingResult,
    SilencePressed,
)

__all__ = [
    "AcknowledgeCommand",
    "BatteryLevel",
    "RealTimeData",
    "SettingResult",
    "SettingResultType",
    "SilencePressed",
    "TemperatureUnit",
]
