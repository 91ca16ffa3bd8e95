"""Test NotificationStream parsing and subscription release."""

from __future__ import annotations

import asyncio

import pytest

from ibbq.exceptions import BLEConnectionError
from ibbq.models.events import RealTimeData
from ibbq.protocol import REAL_TIME_DATA_UUID, parse_real_time
from ibbq.transport import NotificationStream


class _FakeConnection:
    def __init__(self):
        self.released: list[tuple[str, asyncio.Queue]] = []

    async def unsubscribe(self, uuid: str, queue: asyncio.Queue) -> None:
        self.released.append((uuid, queue))


def _stream(queue: asyncio.Queue) -> tuple[_FakeConnection, NotificationStream[RealTimeData]]:
    fake = _FakeConnection()
    return fake, NotificationStream(fake, REAL_TIME_DATA_UUID, queue, parse_real_time)


@pytest.mark.asyncio
async def test_stream_yields_parsed_events() -> None:
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    _, stream = _stream(queue)
    queue.put_nowait(b"\x01\x02")

    assert await anext(stream) == RealTimeData(probe_temperatures=(51.3,))


@pytest.mark.asyncio
async def test_stream_skips_unparseable_values() -> None:
    """Odd-length frames are dropped, not raised."""
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    _, stream = _stream(queue)
    queue.put_nowait(b"\x01")
    queue.put_nowait(b"\xf6\xff")

    assert await anext(stream) == RealTimeData(probe_temperatures=(None,))


@pytest.mark.asyncio
async def test_stream_empty_payload_is_an_event() -> None:
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    _, stream = _stream(queue)
    queue.put_nowait(b"")

    assert await anext(stream) == RealTimeData(probe_temperatures=())


@pytest.mark.asyncio
async def test_aclose_releases_subscription_once() -> None:
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    fake, stream = _stream(queue)

    await stream.aclose()
    await stream.aclose()

    assert stream.closed
    assert fake.released == [(REAL_TIME_DATA_UUID, queue)]


@pytest.mark.asyncio
async def test_iteration_after_close_stops() -> None:
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    _, stream = _stream(queue)
    queue.put_nowait(b"\x01\x02")

    await stream.aclose()

    with pytest.raises(StopAsyncIteration):
        await anext(stream)


@pytest.mark.asyncio
async def test_aclose_wakes_waiting_consumer() -> None:
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    _, stream = _stream(queue)

    async def _consume() -> list[RealTimeData]:
        return [data async for data in stream]

    consumer = asyncio.create_task(_consume())
    queue.put_nowait(b"\x01\x02")
    while not queue.empty():
        await asyncio.sleep(0)
    await stream.aclose()

    assert await asyncio.wait_for(consumer, timeout=1.0) == [
        RealTimeData(probe_temperatures=(51.3,))
    ]


@pytest.mark.asyncio
async def test_context_manager_releases_subscription() -> None:
    queue: asyncio.Queue[bytes] = asyncio.Queue()
    fake, stream = _stream(queue)

    async with stream as entered:
        assert entered is stream
        assert stream.uuid == REAL_TIME_DATA_UUID

    assert fake.released == [(REAL_TIME_DATA_UUID, queue)]


@pytest.mark.asyncio
async def test_link_lost_marker_raises_and_closes() -> None:
    """Events queued before the link was lost are still delivered first."""
    queue: asyncio.Queue[bytes | None] = asyncio.Queue()
    fake, stream = _stream(queue)
    queue.put_nowait(b"\x01\x02")
    queue.put_nowait(None)

    assert await anext(stream) == RealTimeData(probe_temperatures=(51.3,))
    with pytest.raises(BLEConnectionError, match="Disconnected"):
        await anext(stream)

    assert stream.closed
    with pytest.raises(StopAsyncIteration):
        await anext(stream)
    # Closing a stream whose link is gone does not release anything
    await stream.aclose()
    assert fake.released == []
