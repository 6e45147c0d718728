"""Relay Constants - Wire and socket defaults.

These values describe the relay's fixed endpoints and limits. Settings
use them as defaults; code that needs the protocol contract reads them
directly.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class RelayConstants:
    """Immutable relay defaults."""

    # Sender
    TARGET_HOST: Final[str] = "127.0.0.1"  # Consumers are always on loopback
    SENDER_BIND_HOST: Final[str] = "0.0.0.0"
    SENDER_BIND_PORT: Final[int] = 0  # Auto-assigned ephemeral port

    # Listener
    LISTENER_HOST: Final[str] = "127.0.0.1"
    LISTENER_PORT: Final[int] = 8884
    RECV_BUFFER_SIZE: Final[int] = 1024  # Longer datagrams are truncated

    # Host events
    UDP_MESSAGE_EVENT: Final[str] = "udp-message"

    # OSC
    OSC_ADDRESS_PREFIX: Final[str] = "/"
    OSC_FLOAT_TAG: Final[str] = "f"

    # Port range
    MIN_PORT: Final[int] = 0
    MAX_PORT: Final[int] = 65535


# Singleton instance for import convenience
RELAY = RelayConstants()
