"""blendrelay - Relay blendshape values to OSC consumers over UDP."""

__version__ = "0.1.0"

# Export exception hierarchy for easy importing
from blendrelay.exceptions import (
    RelayError,
    ConfigurationError,
    InvalidConfigError,
    InvalidBatchError,
    CodecError,
    EncodeError,
    DecodeError,
    TransportError,
    BindError,
    AddressError,
    SendError,
    ReceiveError,
    EventSinkError,
)

__all__ = [
    "__version__",
    # Base
    "RelayError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidBatchError",
    # Codec
    "CodecError",
    "EncodeError",
    "DecodeError",
    # Transport
    "TransportError",
    "BindError",
    "AddressError",
    "SendError",
    "ReceiveError",
    # Host integration
    "EventSinkError",
]
