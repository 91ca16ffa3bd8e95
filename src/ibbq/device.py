"""Main iBBQ thermometer device classes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from .models.enums import TemperatureUnit
from .models.events import RealTimeData, SettingResult
from .protocol import (
    ACCOUNT_AND_VERIFY_UUID,
    REAL_TIME_DATA_UUID,
    SETTING_DATA_UUID,
    SETTING_RESULT_UUID,
    build_credential_command,
    build_real_time_data_command,
    build_request_battery_level_command,
    build_set_target_range_command,
    build_set_target_temp_command,
    build_set_unit_command,
    parse_real_time,
    parse_setting_result,
)
from .transport import BLEConnection, NotificationStream

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class IBBQDevice:
    """iBBQ BLE thermometer.

    Connecting resolves the thermometer's characteristics. Commands are
    only available on the session returned by authenticate(), which must
    happen right after connecting or the device drops the link.

    Usage:
        async with IBBQDevice("AA:BB:CC:DD:EE:FF") as device:
            session = await device.authenticate()
            await session.enable_real_time_data(True)
            async with await session.real_time() as stream:
                async for data in stream:
                    print(data.probe_temperatures)
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize iBBQ device.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from HA bluetooth integration
            timeout: BLE connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts (default: 4)
            use_services_cache: Enable GATT service caching (default: True)
        """
        self.mac_address = mac_address
        self._connection = BLEConnection(
            mac_address,
            ble_device,
            timeout,
            max_attempts=max_attempts,
            use_services_cache=use_services_cache,
        )

    async def __aenter__(self) -> IBBQDevice:
        """Connect and resolve characteristics."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device."""
        await self.disconnect()

    async def connect(self) -> None:
        """Connect to the device and resolve its characteristics.

        Raises:
            BLEConnectionError: If connection or GATT resolution fails
            BLETimeoutError: If connection times out
        """
        await self._connection.connect()

    async def disconnect(self) -> None:
        """Disconnect from device."""
        await self._connection.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._connection.is_connected

    async def authenticate(self) -> IBBQSession:
        """Send the credential packet to the account-and-verify characteristic.

        Returns:
            Session through which commands and notifications are available

        Raises:
            RuntimeError: If device is not connected
            BLEConnectionError: If the write fails
        """
        if not self.is_connected:
            raise RuntimeError("Device not connected - call connect() first")

        _LOGGER.debug("Authenticating with %s", self.mac_address)
        await self._connection.write(ACCOUNT_AND_VERIFY_UUID, build_credential_command())
        _LOGGER.info("Authenticated with %s", self.mac_address)
        return IBBQSession(self._connection)


class IBBQSession:
    """Commands and notification streams of an authenticated device.

    Only IBBQDevice.authenticate() creates sessions. Writes return once the
    transport accepted them; the device confirms a command, if at all, with
    an AcknowledgeCommand on setting_results() carrying the opcode.
    """

    def __init__(self, connection: BLEConnection):
        self._connection = connection

    async def _write_setting(self, command: bytes) -> None:
        await self._connection.write(SETTING_DATA_UUID, command)

    async def set_temperature_unit(self, unit: TemperatureUnit) -> None:
        """Set the unit shown on the device display.

        Does not affect temperatures exchanged over Bluetooth, which are
        always Celsius.
        """
        await self._write_setting(build_set_unit_command(unit))

    async def set_target_range(self, probe: int, low: float | None, high: float) -> None:
        """Set the alarm range for a probe.

        The device sounds an alarm when the probe leaves the range.

        Args:
            probe: Probe index
            low: Lower bound in Celsius, or None for no lower bound
            high: Upper bound in Celsius

        Raises:
            TemperatureEncodingError: If a bound is out of range (nothing is written)
        """
        await self._write_setting(build_set_target_range_command(probe, low, high))

    async def set_target_temp(self, probe: int, target: float) -> None:
        """Set the target temperature for a probe.

        The device sounds an alarm once the probe goes above target.

        Raises:
            TemperatureEncodingError: If target is out of range (nothing is written)
        """
        await self._write_setting(build_set_target_temp_command(probe, target))

    async def enable_real_time_data(self, enable: bool) -> None:
        """Start or stop the device sending real-time probe temperatures.

        Data is only received while a real_time() stream is also open.
        """
        await self._write_setting(build_real_time_data_command(enable))

    async def request_battery_level(self) -> None:
        """Ask the device to report its battery level.

        The answer arrives as a BatteryLevel on setting_results().
        """
        await self._write_setting(build_request_battery_level_command())

    async def real_time(self) -> NotificationStream[RealTimeData]:
        """Open a stream of real-time probe temperatures.

        Notifications are subscribed before this returns. Also call
        enable_real_time_data(True) to make the device send data.
        """
        return await self._open_stream(REAL_TIME_DATA_UUID, parse_real_time)

    async def setting_results(self) -> NotificationStream[SettingResult]:
        """Open a stream of setting results.

        Includes command acknowledgements, battery levels and alarm
        silence button presses.
        """
        return await self._open_stream(SETTING_RESULT_UUID, parse_setting_result)

    async def _open_stream(
            self,
            uuid: str,
            parser: Callable[[bytes], T | None],
    ) -> NotificationStream[T]:
        queue = await self._connection.subscribe(uuid)
        return NotificationStream(self._connection, uuid, queue, parser)
