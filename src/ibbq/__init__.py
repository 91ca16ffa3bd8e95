"""iBBQ BLE Thermometer Package.

  Pure Python package for communicating with iBBQ BLE barbecue thermometers.
  """

from .device import IBBQDevice, IBBQSession
from .discovery import DEVICE_NAMES, discover_devices, is_compatible
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    IBBQError,
    ParseUuidError,
    TemperatureEncodingError,
)
from .models import (
    AcknowledgeCommand,
    BatteryLevel,
    RealTimeData,
    SettingResult,
    SettingResultType,
    SilencePressed,
    TemperatureUnit,
)
from .protocol import SERVICE_UUID, parse_real_time, parse_setting_result
from .transport import NotificationStream

__version__ = "0.1.0"

__all__ = [
    # Main API
    "IBBQDevice",
    "IBBQSession",
    "NotificationStream",
    "discover_devices",
    "is_compatible",
    # Exceptions
    "IBBQError",
    "BLEConnectionError",
    "BLETimeoutError",
    "TemperatureEncodingError",
    "ParseUuidError",
    # Models
    "RealTimeData",
    "SettingResult",
    "AcknowledgeCommand",
    "BatteryLevel",
    "SilencePressed",
    # Enums
    "TemperatureUnit",
    "SettingResultType",
    # Utilities
    "parse_real_time",
    "parse_setting_result",
    # Constants
    "SERVICE_UUID",
    "DEVICE_NAMES",
]
