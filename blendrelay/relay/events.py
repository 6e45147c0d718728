"""Host event sinks.

The listener forwards each decoded datagram to an EventSink. Hosts
supply their own (a UI bridge, a message bus); the two implementations
here cover queue-based consumers and plain callbacks.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Protocol

EventCallback = Callable[[str, str], None] | Callable[[str, str], Awaitable[None]]


class EventSink(Protocol):
    """Receives (event name, payload) pairs from the listener.

    ``emit`` may be sync or async. Raising from it stops the listener.
    """

    def emit(self, event: str, payload: str) -> None | Awaitable[None]:
        ...


class QueueEventSink:
    """Buffers events in an asyncio queue for a consumer task.

    Usage:
        sink = QueueEventSink()
        task = asyncio.create_task(start_udp_listener(sink))
        event, text = await sink.get()
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue[tuple[str, str]] = asyncio.Queue(maxsize=maxsize)

    async def emit(self, event: str, payload: str) -> None:
        await self._queue.put((event, payload))

    async def get(self) -> tuple[str, str]:
        """Wait for the next (event, payload) pair."""
        return await self._queue.get()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()


class CallbackEventSink:
    """Adapts a sync or async ``callback(event, payload)`` to EventSink."""

    def __init__(self, callback: EventCallback) -> None:
        self._callback = callback

    async def emit(self, event: str, payload: str) -> None:
        result = self._callback(event, payload)
        if inspect.isawaitable(result):
            await result
