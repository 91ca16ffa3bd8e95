"""Connect to an iBBQ thermometer and print probe temperatures.

Usage:
    uv run python examples/monitor_probes.py --duration 60
    uv run python examples/monitor_probes.py --address AA:BB:CC:DD:EE:FF --unit F
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime

from ibbq import (
    AcknowledgeCommand,
    BatteryLevel,
    IBBQDevice,
    NotificationStream,
    RealTimeData,
    SettingResult,
    SilencePressed,
    TemperatureUnit,
    discover_devices,
)


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _format_probes(data: RealTimeData) -> str:
    return " ".join(
        f"p{index}={'--' if temperature is None else f'{temperature:.1f}C'}"
        for index, temperature in enumerate(data.probe_temperatures)
    )


def _print_setting_result(result: SettingResult) -> None:
    if isinstance(result, BatteryLevel):
        print(
            f"[{_timestamp()}] battery={result.current_voltage}/{result.max_voltage}"
        )
    elif isinstance(result, AcknowledgeCommand):
        print(f"[{_timestamp()}] ack command=0x{result.command_id:02x}")
    elif isinstance(result, SilencePressed):
        print(f"[{_timestamp()}] alarm silenced")


async def _print_real_time(stream: NotificationStream[RealTimeData]) -> None:
    async with stream:
        async for data in stream:
            print(f"[{_timestamp()}] {_format_probes(data)}")


async def _print_setting_results(stream: NotificationStream[SettingResult]) -> None:
    async with stream:
        async for result in stream:
            _print_setting_result(result)


async def _find_address(scan_timeout: float) -> str | None:
    print(f"Scanning for iBBQ devices ({scan_timeout:.1f}s)...")
    devices = await discover_devices(timeout=scan_timeout)
    if not devices:
        return None
    device = devices[0]
    print(f"Found {device.name} ({device.address})")
    return device.address


async def monitor(
        address: str | None,
        duration: float,
        unit: TemperatureUnit | None,
        scan_timeout: float,
) -> None:
    """Connect, authenticate and print notifications until duration expires."""
    if address is None:
        address = await _find_address(scan_timeout)
        if address is None:
            print("No iBBQ device found")
            return

    async with IBBQDevice(address) as device:
        session = await device.authenticate()
        if unit is not None:
            await session.set_temperature_unit(unit)

        # Subscribe before asking for data so no reply is missed
        real_time = await session.real_time()
        setting_results = await session.setting_results()
        tasks = [
            asyncio.create_task(_print_real_time(real_time)),
            asyncio.create_task(_print_setting_results(setting_results)),
        ]

        await session.request_battery_level()
        await session.enable_real_time_data(True)

        try:
            if duration > 0:
                await asyncio.sleep(duration)
            else:
                await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print live probe temperatures from an iBBQ thermometer."
    )
    parser.add_argument(
        "--address",
        help="Device MAC address (default: first device found by scanning).",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Monitor duration in seconds (0 = run until Ctrl+C). Default: 30",
    )
    parser.add_argument(
        "--unit",
        choices=["C", "F"],
        help="Set the unit shown on the device display.",
    )
    parser.add_argument(
        "--scan-timeout",
        type=float,
        default=5.0,
        help="Scan duration in seconds when no address is given. Default: 5",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    unit = None
    if args.unit is not None:
        unit = TemperatureUnit.CELSIUS if args.unit == "C" else TemperatureUnit.FAHRENHEIT
    try:
        asyncio.run(
            monitor(
                address=args.address,
                duration=args.duration,
                unit=unit,
                scan_timeout=args.scan_timeout,
            )
        )
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
