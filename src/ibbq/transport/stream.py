"""Typed views over notification subscriptions."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from ..exceptions import BLEConnectionError

if TYPE_CHECKING:
    from .connection import BLEConnection

T = TypeVar("T")

# Queued on close to wake a consumer blocked on get()
_CLOSED = b""


class NotificationStream(Generic[T]):
    """Infinite async iterator of events parsed from one characteristic.

    Values the parser rejects (returns None for) are skipped. Closing the
    stream releases its subscription; events missed while no stream was
    open are not replayed. Once the link is lost the next read raises
    BLEConnectionError and the stream is closed.

    Usage:
        async with await session.real_time() as stream:
            async for data in stream:
                ...
    """

    def __init__(
            self,
            connection: BLEConnection,
            uuid: str,
            queue: asyncio.Queue[bytes | None],
            parser: Callable[[bytes], T | None],
    ):
        self._connection = connection
        self._uuid = uuid
        self._queue = queue
        self._parser = parser
        self._closed = False

    @property
    def uuid(self) -> str:
        """UUID of the characteristic this stream reads from."""
        return self._uuid

    @property
    def closed(self) -> bool:
        """Whether the stream was closed or its link was lost."""
        return self._closed

    def __aiter__(self) -> NotificationStream[T]:
        return self

    async def __anext__(self) -> T:
        while not self._closed:
            data = await self._queue.get()
            if self._closed:
                break
            if data is None:
                self._closed = True
                raise BLEConnectionError(f"Disconnected while reading {self._uuid}")
            event = self._parser(data)
            if event is not None:
                return event
        raise StopAsyncIteration

    async def aclose(self) -> None:
        """Release the underlying subscription."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        await self._connection.unsubscribe(self._uuid, self._queue)

    async def __aenter__(self) -> NotificationStream[T]:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
