"""Tests for the async UDP socket and target resolution."""

import socket
import sys

import pytest

from blendrelay.exceptions import AddressError, TransportError
from blendrelay.transport import UDPSocket, resolve_target


class TestResolveTarget:
    """Tests for resolve_target."""

    def test_valid_loopback(self):
        """Loopback host and port form a socket address."""
        assert resolve_target("127.0.0.1", 9000) == ("127.0.0.1", 9000)

    def test_max_port(self):
        """Port 65535 is accepted."""
        assert resolve_target("127.0.0.1", 65535) == ("127.0.0.1", 65535)

    def test_port_zero_rejected(self):
        """Port 0 cannot be sent to."""
        with pytest.raises(AddressError) as exc_info:
            resolve_target("127.0.0.1", 0)

        assert exc_info.value.port == 0
        assert isinstance(exc_info.value, TransportError)

    @pytest.mark.parametrize("port", [-1, 65536, 100000])
    def test_out_of_range_port_rejected(self, port):
        """Ports outside 16 bits are rejected."""
        with pytest.raises(AddressError):
            resolve_target("127.0.0.1", port)

    @pytest.mark.parametrize("port", ["9000", 9000.0, True])
    def test_non_integer_port_rejected(self, port):
        """Ports must be real integers."""
        with pytest.raises(AddressError):
            resolve_target("127.0.0.1", port)

    @pytest.mark.parametrize("host", ["localhost", "::1", "300.0.0.1", ""])
    def test_non_ipv4_host_rejected(self, host):
        """Only IPv4 literals are accepted."""
        with pytest.raises(AddressError) as exc_info:
            resolve_target(host, 9000)

        assert exc_info.value.host == host


class TestUDPSocket:
    """Tests for UDPSocket."""

    @pytest.mark.asyncio
    async def test_bind_ephemeral_port(self):
        """Binding port 0 assigns a real port."""
        sock = await UDPSocket.bind("127.0.0.1", 0)
        try:
            host, port = sock.local_address
            assert host == "127.0.0.1"
            assert port > 0
        finally:
            sock.close()

    @pytest.mark.asyncio
    async def test_bind_in_use_raises_oserror(self):
        """Binding an occupied port fails with OSError."""
        blocker = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        blocker.bind(("127.0.0.1", 0))
        try:
            with pytest.raises(OSError):
                await UDPSocket.bind("127.0.0.1", blocker.getsockname()[1])
        finally:
            blocker.close()

    @pytest.mark.asyncio
    async def test_send_and_receive(self):
        """Datagrams sent between two sockets arrive intact."""
        async with await UDPSocket.bind("127.0.0.1", 0) as receiver:
            async with await UDPSocket.bind("127.0.0.1", 0) as sender:
                await sender.send_to(b"ping", receiver.local_address)
                data, source = await receiver.receive(1024)

        assert data == b"ping"
        assert source[0] == "127.0.0.1"

    @pytest.mark.asyncio
    @pytest.mark.skipif(
        sys.platform == "win32",
        reason="Windows reports oversized datagrams as receive errors",
    )
    async def test_receive_truncates_to_buffer_size(self):
        """Bytes beyond the buffer size are dropped, not carried over."""
        async with await UDPSocket.bind("127.0.0.1", 0) as receiver:
            async with await UDPSocket.bind("127.0.0.1", 0) as sender:
                await sender.send_to(b"x" * 2000, receiver.local_address)
                await sender.send_to(b"next", receiver.local_address)

                first, _ = await receiver.receive(1024)
                second, _ = await receiver.receive(1024)

        assert first == b"x" * 1024
        assert second == b"next"

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        """Leaving the context closes the socket."""
        async with await UDPSocket.bind("127.0.0.1", 0) as sock:
            assert sock.closed is False

        assert sock.closed is True

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        """Closing twice is harmless."""
        sock = await UDPSocket.bind("127.0.0.1", 0)
        sock.close()
        sock.close()
        assert sock.closed is True
