"""Async UDP socket - Bind, send and receive on the running event loop.

Thin wrapper over a non-blocking datagram socket. Socket-level failures
surface as ``OSError`` so each flow can map them onto its own error
(the sender tags failures with the blendshape name, the listener logs
and continues).

Usage:
    async with await UDPSocket.bind("0.0.0.0", 0) as sock:
        target = resolve_target("127.0.0.1", 9000)
        await sock.send_to(datagram, target)
"""

import asyncio
import ipaddress
import socket

from blendrelay.config.constants import RELAY
from blendrelay.exceptions import AddressError

Address = tuple[str, int]


def resolve_target(host: str, port: int) -> Address:
    """Build a destination socket address.

    Args:
        host: IPv4 literal (no name resolution)
        port: Destination port, 1-65535

    Returns:
        (host, port) tuple usable with ``send_to``

    Raises:
        AddressError: If host is not IPv4 or the port cannot be sent to
    """
    try:
        ip = ipaddress.IPv4Address(host)
    except ValueError as e:
        raise AddressError(host, port, str(e)) from e

    if isinstance(port, bool) or not isinstance(port, int):
        raise AddressError(host, port, "port must be an integer")
    if not RELAY.MIN_PORT < port <= RELAY.MAX_PORT:
        raise AddressError(
            host, port, f"port must be in 1-{RELAY.MAX_PORT}"
        )

    return (str(ip), port)


class UDPSocket:
    """Non-blocking IPv4 datagram socket driven by asyncio."""

    def __init__(self, sock: socket.socket) -> None:
        sock.setblocking(False)
        self._socket = sock
        self._closed = False

    @classmethod
    async def bind(cls, host: str, port: int) -> "UDPSocket":
        """Create a socket bound to (host, port).

        Raises:
            OSError: If the address is unavailable or already in use
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((host, port))
        except OSError:
            sock.close()
            raise
        return cls(sock)

    @property
    def local_address(self) -> Address:
        """Bound (host, port); the port is the assigned one when bound to 0."""
        host, port = self._socket.getsockname()[:2]
        return (host, port)

    @property
    def closed(self) -> bool:
        return self._closed

    async def send_to(self, data: bytes, address: Address) -> None:
        """Send one datagram."""
        loop = asyncio.get_running_loop()
        await loop.sock_sendto(self._socket, data, address)

    async def receive(self, buffer_size: int) -> tuple[bytes, Address]:
        """Wait for one datagram.

        Payloads longer than ``buffer_size`` are truncated; the excess is
        dropped, not carried into the next call.
        """
        loop = asyncio.get_running_loop()
        data, address = await loop.sock_recvfrom(self._socket, buffer_size)
        return data, address

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._socket.close()

    async def __aenter__(self) -> "UDPSocket":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()
