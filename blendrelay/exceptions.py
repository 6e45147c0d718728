"""blendrelay Exception Hierarchy.

Provides structured exception classes for the relay flows.

Hierarchy:
    RelayError (base)
    ├── ConfigurationError
    │   └── InvalidConfigError
    ├── InvalidBatchError
    ├── CodecError
    │   ├── EncodeError
    │   └── DecodeError
    ├── TransportError
    │   ├── BindError
    │   ├── AddressError
    │   ├── SendError
    │   └── ReceiveError
    └── EventSinkError
"""

from typing import Any


class RelayError(Exception):
    """Base exception for all blendrelay errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(RelayError):
    """Base exception for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(
        self,
        config_key: str,
        value: Any,
        reason: str,
    ) -> None:
        super().__init__(
            message=f"Invalid configuration for {config_key}: {reason}",
            details={
                "config_key": config_key,
                "value": str(value),
                "reason": reason,
            },
            recoverable=False,
        )


class InvalidBatchError(RelayError):
    """Raised when a host payload is not a valid blendshape batch."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Invalid blendshape batch: {reason}",
            details={"reason": reason},
            recoverable=False,
        )


# =============================================================================
# Codec Errors
# =============================================================================


class CodecError(RelayError):
    """Base exception for OSC encode/decode errors."""

    pass


class EncodeError(CodecError):
    """Raised when a blendshape cannot be serialized as an OSC message."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to encode OSC message for {name}: {reason}",
            details={"name": name, "reason": reason},
            recoverable=False,
        )
        self.name = name


class DecodeError(CodecError):
    """Raised when a datagram is not a parseable OSC message."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Failed to decode OSC message: {reason}",
            details={"reason": reason},
            recoverable=False,
        )


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(RelayError):
    """Base exception for transport-related errors."""

    pass


class BindError(TransportError):
    """Raised when a local UDP socket cannot be bound."""

    def __init__(self, host: str, port: int, reason: str) -> None:
        super().__init__(
            message=f"Failed to bind UDP socket on {host}:{port}: {reason}",
            details={"host": host, "port": port, "reason": reason},
            recoverable=False,
        )
        self.host = host
        self.port = port


class AddressError(TransportError):
    """Raised when a destination cannot form a valid socket address."""

    def __init__(self, host: str, port: Any, reason: str) -> None:
        super().__init__(
            message=f"Invalid target address {host}:{port}: {reason}",
            details={"host": host, "port": port, "reason": reason},
            recoverable=False,
        )
        self.host = host
        self.port = port


class SendError(TransportError):
    """Raised when a datagram for one blendshape cannot be sent."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to send OSC message for {name}: {reason}",
            details={"name": name, "reason": reason},
            recoverable=True,  # Datagram transport, caller can resend the batch
        )
        self.name = name


class ReceiveError(TransportError):
    """Raised when a receive call on the listener socket fails."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Error receiving UDP message: {reason}",
            details={"reason": reason},
            recoverable=True,
        )


# =============================================================================
# Host Integration Errors
# =============================================================================


class EventSinkError(RelayError):
    """Raised when the host event sink rejects a forwarded message."""

    def __init__(self, event: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to emit {event} event: {reason}",
            details={"event": event, "reason": reason},
            recoverable=False,
        )
        self.event = event
