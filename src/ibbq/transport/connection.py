"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from bleak import BleakClient, BleakScanner
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..exceptions import BLEConnectionError, BLETimeoutError
from ..protocol import (
    ACCOUNT_AND_VERIFY_UUID,
    HISTORY_DATA_UUID,
    REAL_TIME_DATA_UUID,
    SERVICE_UUID,
    SETTING_DATA_UUID,
    SETTING_RESULT_UUID,
)

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CharacteristicEvent:
    """A value-changed notification, tagged with its source characteristic."""

    uuid: str
    value: bytes


@dataclass(frozen=True, slots=True)
class CharacteristicHandles:
    """The iBBQ characteristics, resolved once per connection."""

    setting_result: BleakGATTCharacteristic
    account_and_verify: BleakGATTCharacteristic
    history_data: BleakGATTCharacteristic
    real_time_data: BleakGATTCharacteristic
    setting_data: BleakGATTCharacteristic

    def get(self, uuid: str) -> BleakGATTCharacteristic:
        """Look up a handle by its 128-bit UUID string.

        Raises:
            BLEConnectionError: If uuid is not an iBBQ characteristic
        """
        for handle_field in fields(self):
            characteristic = getattr(self, handle_field.name)
            if characteristic.uuid.lower() == uuid.lower():
                return characteristic
        raise BLEConnectionError(f"Characteristic {uuid} not resolved")


_CHARACTERISTIC_UUIDS = {
    "setting_result": SETTING_RESULT_UUID,
    "account_and_verify": ACCOUNT_AND_VERIFY_UUID,
    "history_data": HISTORY_DATA_UUID,
    "real_time_data": REAL_TIME_DATA_UUID,
    "setting_data": SETTING_DATA_UUID,
}


class BLEConnection:
    """Manages BLE connection to an iBBQ thermometer.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Context manager for automatic cleanup
    - Shared, reference-counted notification subscriptions with one queue
      per subscriber
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from Home Assistant bluetooth integration
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
        """
        self.mac_address = mac_address
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache

        self._client: BleakClient | None = None
        self._characteristics: CharacteristicHandles | None = None
        self._subscribers: dict[str, list[asyncio.Queue[bytes | None]]] = {}

    async def __aenter__(self) -> BLEConnection:
        """Connect to device (context manager entry)."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device (context manager exit)."""
        await self.disconnect()

    async def connect(self) -> None:
        """Establish BLE connection and resolve the iBBQ characteristics.

        Raises:
            BLEConnectionError: If connection or GATT resolution fails
            BLETimeoutError: If connection times out
        """
        if self.is_connected:
            return

        if self._client is not None:
            # Link dropped since the last connect; streams on it are dead
            self._fail_subscribers()
            self._client = None
            self._characteristics = None

        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts
            )

            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                disconnected_callback=self._on_disconnected,
                timeout=self.timeout,
            )

            _LOGGER.debug("Connected to %s", self.mac_address)

        except BLEConnectionError:
            raise
        except asyncio.TimeoutError as e:
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except Exception as e:
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

        try:
            self._characteristics = self._resolve_characteristics()
        except BLEConnectionError:
            await self.disconnect()
            raise

    async def disconnect(self) -> None:
        """Disconnect from device.

        Open notification streams raise BLEConnectionError on their next read.
        """
        self._fail_subscribers()
        self._characteristics = None
        client, self._client = self._client, None
        if client and client.is_connected:
            try:
                _LOGGER.debug("Disconnecting from %s", self.mac_address)
                await client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error during disconnect: %s", e)

    def _on_disconnected(self, client: BleakClient) -> None:
        """Handle a link drop reported by bleak."""
        if client is not self._client:
            return
        _LOGGER.debug("Disconnected from %s", self.mac_address)
        self._fail_subscribers()

    def _fail_subscribers(self) -> None:
        """Wake every subscriber with the link-lost marker and forget them."""
        for queues in self._subscribers.values():
            for queue in queues:
                queue.put_nowait(None)
        self._subscribers.clear()

    def _resolve_characteristics(self) -> CharacteristicHandles:
        """Find the iBBQ service and its characteristics.

        Raises:
            BLEConnectionError: If the service or a characteristic is missing
        """
        service = self._client.services.get_service(SERVICE_UUID)
        if not service:
            raise BLEConnectionError(f"Service {SERVICE_UUID} not found")

        handles = {}
        for name, uuid in _CHARACTERISTIC_UUIDS.items():
            characteristic = service.get_characteristic(uuid)
            if characteristic is None:
                raise BLEConnectionError(f"Characteristic {uuid} not found")
            handles[name] = characteristic

        _LOGGER.debug("Resolved %d characteristics on %s", len(handles), SERVICE_UUID)
        return CharacteristicHandles(**handles)

    @property
    def characteristics(self) -> CharacteristicHandles:
        """Characteristic handles resolved on connect."""
        if self._characteristics is None:
            raise BLEConnectionError("Not connected")
        return self._characteristics

    def _require_client(self) -> BleakClient:
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")
        return self._client

    async def write(self, uuid: str, data: bytes) -> None:
        """Write bytes to a characteristic.

        Completion means the transport accepted the write, not that the
        device acted on it.

        Args:
            uuid: Characteristic UUID
            data: Bytes to write

        Raises:
            BLEConnectionError: If not connected or write fails
        """
        client = self._require_client()
        characteristic = self.characteristics.get(uuid)

        _LOGGER.debug("Writing %s to %s", data.hex(), uuid)
        try:
            await client.write_gatt_char(
                characteristic,
                data,
                response="write" in characteristic.properties,
            )
        except Exception as e:
            raise BLEConnectionError(f"Write failed: {e}") from e

    async def subscribe(self, uuid: str) -> asyncio.Queue[bytes | None]:
        """Subscribe to notifications from a characteristic.

        Notifications are enabled on the device for the first subscriber
        only. Each subscriber gets its own queue, filled from the moment
        this returns. None is queued when the link is lost or when the
        shared notification setup fails.

        Args:
            uuid: Characteristic UUID

        Returns:
            Queue receiving raw notification values, or None once the
            subscription is dead

        Raises:
            BLEConnectionError: If not connected or notify setup fails
        """
        client = self._require_client()
        characteristic = self.characteristics.get(uuid)
        uuid = characteristic.uuid.lower()

        queue: asyncio.Queue[bytes | None] = asyncio.Queue()
        queues = self._subscribers.setdefault(uuid, [])
        queues.append(queue)

        if len(queues) == 1:
            try:
                await client.start_notify(characteristic, self._notification_callback)
            except Exception as e:
                # Subscribers that joined while start_notify was pending share the failure
                if self._subscribers.get(uuid) is queues:
                    del self._subscribers[uuid]
                for other in queues:
                    if other is not queue:
                        other.put_nowait(None)
                raise BLEConnectionError(f"Failed to start notifications: {e}") from e
            _LOGGER.debug("Notifications started on %s", uuid)

        return queue

    async def unsubscribe(self, uuid: str, queue: asyncio.Queue[bytes | None]) -> None:
        """Release a subscription from subscribe().

        Notifications are disabled once the last subscriber leaves. Failing
        to disable them is logged, since the link may already be gone.
        """
        uuid = uuid.lower()
        if not self._remove_subscriber(uuid, queue) or uuid in self._subscribers:
            return

        if not self.is_connected:
            return

        try:
            await self._client.stop_notify(self.characteristics.get(uuid))
            _LOGGER.debug("Notifications stopped on %s", uuid)
        except Exception as e:
            _LOGGER.warning("Error stopping notifications on %s: %s", uuid, e)

    def _remove_subscriber(self, uuid: str, queue: asyncio.Queue[bytes | None]) -> bool:
        queues = self._subscribers.get(uuid)
        if not queues or queue not in queues:
            return False
        queues.remove(queue)
        if not queues:
            del self._subscribers[uuid]
        return True

    def _notification_callback(self, sender: BleakGATTCharacteristic, data: bytearray) -> None:
        """Handle incoming BLE notifications.

        Args:
            sender: Characteristic that sent notification
            data: Notification data
        """
        self._dispatch(CharacteristicEvent(uuid=sender.uuid.lower(), value=bytes(data)))

    def _dispatch(self, event: CharacteristicEvent) -> None:
        """Queue a notification for every subscriber of its characteristic."""
        queues = self._subscribers.get(event.uuid)
        if not queues:
            _LOGGER.info("Ignoring notification from %s: %s", event.uuid, event.value.hex())
            return
        for queue in queues:
            queue.put_nowait(event.value)

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected
