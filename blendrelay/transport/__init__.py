"""UDP transport for the relay flows."""

from blendrelay.transport.udp import Address, UDPSocket, resolve_target

__all__ = ["Address", "UDPSocket", "resolve_target"]
