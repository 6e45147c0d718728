"""Pytest configuration and shared fixtures."""

import os
import socket
from typing import Generator

import pytest

# Set test environment variables before importing settings
os.environ.update({
    "LOG_LEVEL": "DEBUG",
    "LOG_JSON": "false",
})


@pytest.fixture
def test_settings():
    """Provide test settings bound to an ephemeral listener port."""
    from blendrelay.config.settings import Settings
    return Settings(
        _env_file=None,
        listener_host="127.0.0.1",
        listener_port=0,
    )


@pytest.fixture
def udp_consumer() -> Generator[socket.socket, None, None]:
    """Blocking UDP socket on an ephemeral loopback port.

    Stands in for the OSC consumer the sender targets.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def udp_client() -> Generator[socket.socket, None, None]:
    """Plain UDP socket for sending datagrams to a listener."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    yield sock
    sock.close()


@pytest.fixture
def receive_datagrams():
    """Read ``count`` datagrams from a blocking socket."""

    def _receive(sock: socket.socket, count: int) -> list[bytes]:
        return [sock.recvfrom(65535)[0] for _ in range(count)]

    return _receive
