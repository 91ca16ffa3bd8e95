"""BLE transport layer."""

from .connection import BLEConnection, CharacteristicEvent, CharacteristicHandles
from .stream import NotificationStream

__all__ = [
    "BLEConnection",
    "CharacteristicEvent",
    "CharacteristicHandles",
    "NotificationStream",
]
