from __future__ import annotations

import asyncio

from .errors import ChannelClosed

_CLOSED = object()


class TargetChannel:
    """Single-producer, single-consumer channel of target brightness values.

    The consumer only cares about the newest value; the queue is unbounded so
    the producer never waits on a stalled consumer.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, target: int) -> None:
        if self._closed:
            raise ChannelClosed("target channel closed")
        self._queue.put_nowait(int(target))

    async def receive(self) -> int:
        """Block until one value is available and return exactly that value."""
        item = await self._queue.get()
        if item is _CLOSED:
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosed("target channel closed")
        return item

    def latest(self, held: int) -> int:
        """Drain without blocking; return the newest value, or held if none."""
        value = held
        while True:
            try:
                item = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return value
            if item is _CLOSED:
                self._queue.put_nowait(_CLOSED)
                raise ChannelClosed("target channel closed")
            value = item

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
