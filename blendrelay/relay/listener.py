"""UDP Listener - Forward inbound text datagrams to the host.

Binds a fixed local endpoint (default 127.0.0.1:8884) and forwards every
datagram that decodes as UTF-8 to an EventSink under the ``udp-message``
event.

Loop behavior:
- Non-UTF-8 payloads are dropped without logging
- Receive failures are logged and the loop continues
- A sink failure stops the listener and is raised to the caller
- ``stop()`` ends the loop; a pending receive or blocked sink emit is cancelled

Usage:
    listener = UDPListener(sink)
    await listener.start()            # BindError surfaces here
    task = asyncio.create_task(listener.serve())
    ...
    listener.stop()
    await task
"""

import asyncio
import inspect
from dataclasses import dataclass, field

from blendrelay.config.constants import RELAY
from blendrelay.config.settings import Settings
from blendrelay.exceptions import BindError, EventSinkError, ReceiveError
from blendrelay.observability.logging import ListenerLogger
from blendrelay.relay.events import EventSink
from blendrelay.transport.udp import Address, UDPSocket


@dataclass
class ListenerConfig:
    """Configuration for the UDP listener."""

    host: str = RELAY.LISTENER_HOST
    port: int = RELAY.LISTENER_PORT

    # Datagrams longer than this are truncated by the receive call
    buffer_size: int = RELAY.RECV_BUFFER_SIZE

    event_name: str = RELAY.UDP_MESSAGE_EVENT

    @classmethod
    def from_settings(cls, settings: Settings) -> "ListenerConfig":
        return cls(
            host=settings.listener_host,
            port=settings.listener_port,
            buffer_size=settings.recv_buffer_size,
            event_name=settings.event_name,
        )


@dataclass
class ListenerStats:
    """Counters for one listener run."""

    forwarded: int = 0
    discarded: int = 0
    receive_errors: int = 0
    last_error: dict = field(default_factory=dict)


class UDPListener:
    """Receives text datagrams and emits them as host events."""

    def __init__(
        self,
        sink: EventSink,
        config: ListenerConfig | None = None,
    ) -> None:
        """Initialize listener.

        Args:
            sink: Host event sink for decoded messages
            config: Listener configuration
        """
        self._sink = sink
        self._config = config or ListenerConfig()
        self._log = ListenerLogger(self._config.host, self._config.port)
        self._stats = ListenerStats()

        # Created on start
        self._socket: UDPSocket | None = None
        self._stop_event = asyncio.Event()
        self._running = False

    async def start(self) -> None:
        """Bind the listening socket.

        Raises:
            BindError: If the address is unavailable
        """
        if self._socket is not None:
            return

        try:
            self._socket = await UDPSocket.bind(self._config.host, self._config.port)
        except OSError as e:
            raise BindError(self._config.host, self._config.port, str(e)) from e

        self._stats = ListenerStats()
        self._log.bind(bound_port=self._socket.local_address[1])
        self._log.listener_started(self._config.buffer_size)

    async def serve(self) -> None:
        """Run the receive loop until ``stop()`` is called.

        Raises:
            EventSinkError: If the sink fails to accept a message
            RuntimeError: If called before ``start()``
        """
        if self._socket is None:
            raise RuntimeError("Listener not started")

        self._running = True
        stop_waiter = asyncio.ensure_future(self._stop_event.wait())
        receive: asyncio.Future | None = None

        try:
            while not self._stop_event.is_set():
                receive = asyncio.ensure_future(
                    self._socket.receive(self._config.buffer_size)
                )
                done, _ = await asyncio.wait(
                    {receive, stop_waiter},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if receive not in done:
                    break

                received, receive = receive, None
                try:
                    payload, source = received.result()
                except OSError as e:
                    self._record_receive_error(ReceiveError(str(e)))
                    continue

                await self._handle_datagram(payload, source, stop_waiter)
        finally:
            if receive is not None:
                receive.cancel()
            stop_waiter.cancel()
            self._close()

    async def run(self) -> None:
        """Bind and serve until stopped."""
        await self.start()
        await self.serve()

    def stop(self) -> None:
        """Signal the receive loop to exit.

        A stop requested before ``serve()`` starts is kept and ends the
        next ``serve()`` immediately.
        """
        self._stop_event.set()

    async def _handle_datagram(
        self,
        payload: bytes,
        source: Address,
        stop_waiter: asyncio.Future,
    ) -> None:
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError:
            self._stats.discarded += 1
            return

        if not await self._emit(text, stop_waiter):
            return

        self._stats.forwarded += 1
        self._log.message_forwarded(
            self._config.event_name,
            size=len(payload),
            source=f"{source[0]}:{source[1]}",
        )

    async def _emit(self, text: str, stop_waiter: asyncio.Future) -> bool:
        """Hand one message to the sink.

        Returns:
            False if ``stop()`` interrupted a sink that was still blocked
        """
        event = self._config.event_name
        try:
            result = self._sink.emit(event, text)
        except Exception as e:
            raise EventSinkError(event, str(e)) from e

        if not inspect.isawaitable(result):
            return True

        pending = asyncio.ensure_future(result)
        try:
            done, _ = await asyncio.wait(
                {pending, stop_waiter},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if pending not in done:
                return False
            pending.result()
        except Exception as e:
            raise EventSinkError(event, str(e)) from e
        finally:
            if not pending.done():
                pending.cancel()
        return True

    def _record_receive_error(self, error: ReceiveError) -> None:
        self._stats.receive_errors += 1
        self._stats.last_error = error.to_dict()
        self._log.receive_error(self._stats.last_error)

    def _close(self) -> None:
        self._running = False
        # The stop request has been consumed by the loop that just exited
        self._stop_event.clear()
        if self._socket is not None:
            self._socket.close()
            self._socket = None
            self._log.listener_stopped(
                forwarded=self._stats.forwarded,
                discarded=self._stats.discarded,
                receive_errors=self._stats.receive_errors,
            )

    @property
    def is_running(self) -> bool:
        """Whether the receive loop is active."""
        return self._running

    @property
    def local_address(self) -> Address | None:
        """Bound address, or None before start / after stop."""
        if self._socket is None:
            return None
        return self._socket.local_address

    @property
    def messages_forwarded(self) -> int:
        """Datagrams forwarded to the sink."""
        return self._stats.forwarded

    @property
    def datagrams_discarded(self) -> int:
        """Datagrams dropped as non-UTF-8."""
        return self._stats.discarded

    @property
    def receive_errors(self) -> int:
        """Transient receive failures survived."""
        return self._stats.receive_errors

    @property
    def config(self) -> ListenerConfig:
        """Current configuration."""
        return self._config


def create_listener(
    sink: EventSink,
    settings: Settings | None = None,
) -> UDPListener:
    """Factory function to create a listener from settings.

    Args:
        sink: Host event sink
        settings: Settings to read endpoint and buffer size from

    Returns:
        Configured UDPListener
    """
    if settings is None:
        return UDPListener(sink)
    return UDPListener(sink, ListenerConfig.from_settings(settings))
