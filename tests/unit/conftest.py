"""Fixtures for iBBQ tests."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from ibbq.protocol import (
    ACCOUNT_AND_VERIFY_UUID,
    HISTORY_DATA_UUID,
    REAL_TIME_DATA_UUID,
    SERVICE_UUID,
    SETTING_DATA_UUID,
    SETTING_RESULT_UUID,
)

IBBQ_CHARACTERISTICS = {
    SETTING_RESULT_UUID: ["notify"],
    ACCOUNT_AND_VERIFY_UUID: ["write"],
    HISTORY_DATA_UUID: ["notify"],
    REAL_TIME_DATA_UUID: ["notify"],
    SETTING_DATA_UUID: ["write"],
}


class FakeCharacteristic:
    def __init__(self, uuid: str, properties: list[str]):
        self.uuid = uuid
        self.properties = properties


class FakeService:
    def __init__(self, uuid: str, characteristics: list[FakeCharacteristic]):
        self.uuid = uuid
        self._characteristics = {c.uuid.lower(): c for c in characteristics}

    def get_characteristic(self, uuid: str) -> FakeCharacteristic | None:
        return self._characteristics.get(uuid.lower())


class FakeServices:
    def __init__(self, services: list[FakeService]):
        self._services = {s.uuid.lower(): s for s in services}

    def get_service(self, uuid: str) -> FakeService | None:
        return self._services.get(uuid.lower())


class FakeBleakClient:
    """Stands in for a connected BleakClient."""

    def __init__(self, services: FakeServices):
        self.services = services
        self.is_connected = True
        self.written: list[tuple[str, bytes, bool | None]] = []
        self.started: list[str] = []
        self.stopped: list[str] = []
        self.write_error: Exception | None = None
        self.start_notify_error: Exception | None = None
        self.start_notify_gate: asyncio.Event | None = None
        self.disconnected_callback = None
        self._callbacks = {}

    async def write_gatt_char(self, characteristic, data, response=None) -> None:
        if self.write_error:
            raise self.write_error
        self.written.append((characteristic.uuid, bytes(data), response))

    async def start_notify(self, characteristic, callback) -> None:
        if self.start_notify_gate is not None:
            await self.start_notify_gate.wait()
        if self.start_notify_error:
            raise self.start_notify_error
        self.started.append(characteristic.uuid)
        self._callbacks[characteristic.uuid] = (characteristic, callback)

    async def stop_notify(self, characteristic) -> None:
        self.stopped.append(characteristic.uuid)
        self._callbacks.pop(characteristic.uuid, None)

    async def disconnect(self) -> None:
        self.drop()

    def drop(self) -> None:
        """Lose the link and report it as bleak would."""
        if not self.is_connected:
            return
        self.is_connected = False
        self._callbacks.clear()
        if self.disconnected_callback is not None:
            self.disconnected_callback(self)

    def notify(self, uuid: str, data: bytes) -> None:
        """Deliver a notification as bleak would."""
        characteristic, callback = self._callbacks[uuid]
        callback(characteristic, bytearray(data))


def build_services(missing: tuple[str, ...] = (), with_service: bool = True) -> FakeServices:
    if not with_service:
        return FakeServices([])
    return FakeServices([
        FakeService(
            SERVICE_UUID,
            [
                FakeCharacteristic(uuid, props)
                for uuid, props in IBBQ_CHARACTERISTICS.items()
                if uuid not in missing
            ],
        )
    ])


@pytest.fixture
def ble_device() -> SimpleNamespace:
    """A scanned BLEDevice."""
    return SimpleNamespace(name="iBBQ", address="AA:BB:CC:DD:EE:FF")


@pytest.fixture
def fake_client() -> FakeBleakClient:
    return FakeBleakClient(build_services())


@pytest.fixture
def connect_calls(monkeypatch, fake_client) -> list[dict]:
    """Route establish_connection to fake_client and record its kwargs."""
    calls: list[dict] = []

    async def _establish_connection(**kwargs):
        calls.append(kwargs)
        fake_client.is_connected = True
        fake_client.disconnected_callback = kwargs.get("disconnected_callback")
        return fake_client

    monkeypatch.setattr(
        "ibbq.transport.connection.establish_connection", _establish_connection
    )
    return calls


@pytest.fixture
def make_services():
    """Build GATT services, optionally without some characteristics or the service."""
    return build_services
