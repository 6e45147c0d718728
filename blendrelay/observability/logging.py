"""Structured Logging - JSON logs for relay events.

Provides structured logging for:
- Blendshape batch sends and per-entry failures
- Listener lifecycle (start, stop)
- Transient receive errors
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, output JSON; else human-readable
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Also configure standard logging to use structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Bound structlog logger
    """
    return structlog.get_logger(name)


# -----------------------------------------------------------------------------
# Event-specific logging functions
# -----------------------------------------------------------------------------


class SenderLogger:
    """Logger for blendshape send events."""

    def __init__(self, port: int) -> None:
        self._log = get_logger("sender").bind(port=port)

    def batch_sent(self, count: int) -> None:
        """Log a completed batch."""
        self._log.debug(
            "blendshapes_sent",
            event_type="sender.batch_sent",
            count=count,
        )

    def entry_failed(self, name: str, error: str, sent: int) -> None:
        """Log the entry that aborted a batch."""
        self._log.warning(
            "blendshape_send_failed",
            event_type="sender.entry_failed",
            name=name,
            error=error,
            sent_before_failure=sent,
        )


class ListenerLogger:
    """Logger for UDP listener events."""

    def __init__(self, host: str, port: int) -> None:
        self._log = get_logger("listener").bind(host=host, port=port)

    def bind(self, **fields: Any) -> None:
        """Attach extra context (e.g. the bound port) to later events."""
        self._log = self._log.bind(**fields)

    def listener_started(self, buffer_size: int) -> None:
        """Log listener bind."""
        self._log.info(
            "listener_started",
            event_type="listener.started",
            buffer_size=buffer_size,
        )

    def listener_stopped(
        self,
        forwarded: int,
        discarded: int,
        receive_errors: int,
    ) -> None:
        """Log listener shutdown with counters."""
        self._log.info(
            "listener_stopped",
            event_type="listener.stopped",
            forwarded=forwarded,
            discarded=discarded,
            receive_errors=receive_errors,
        )

    def receive_error(self, error: dict[str, Any]) -> None:
        """Log a transient receive failure."""
        self._log.warning(
            "udp_receive_error",
            event_type="listener.receive_error",
            **error,
        )

    def message_forwarded(self, event: str, size: int, source: str) -> None:
        """Log a forwarded message."""
        self._log.debug(
            "udp_message_forwarded",
            event_type="listener.forwarded",
            event_name=event,
            size=size,
            source=source,
        )


def init_logging(json_format: bool = True, level: str = "INFO") -> None:
    """Initialize logging with defaults.

    Call this once at application startup.
    """
    configure_logging(level=level, json_format=json_format)
