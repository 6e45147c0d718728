"""blendrelay - Standalone listener entry point.

Runs the UDP listener outside a host application, logging every
forwarded message. Configuration comes from the environment (see
blendrelay.config.settings). SIGINT/SIGTERM stop the listener cleanly.
"""

import asyncio
import signal
import sys

from pydantic import ValidationError

from blendrelay import __version__
from blendrelay.commands import start_udp_listener
from blendrelay.config.settings import Settings, get_settings
from blendrelay.exceptions import InvalidConfigError, RelayError
from blendrelay.observability.logging import get_logger, init_logging
from blendrelay.relay.events import CallbackEventSink
from blendrelay.relay.listener import UDPListener, create_listener

logger = get_logger(__name__)


def log_event(event: str, payload: str) -> None:
    """Event sink callback for standalone mode."""
    logger.info("udp_message", event_name=event, payload=payload)


def install_signal_handlers(listener: UDPListener) -> None:
    """Stop the listener on SIGINT/SIGTERM where the loop supports it."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, listener.stop)
        except NotImplementedError:
            # Windows event loops; Ctrl+C falls back to KeyboardInterrupt
            pass


async def run(settings: Settings) -> None:
    """Run the listener until a stop signal arrives."""
    sink = CallbackEventSink(log_event)
    listener = create_listener(sink, settings)
    install_signal_handlers(listener)

    logger.info(
        "blendrelay_starting",
        version=__version__,
        host=settings.listener_host,
        port=settings.listener_port,
    )
    await start_udp_listener(sink, settings, listener=listener)
    logger.info("blendrelay_shutdown_complete")


def load_settings() -> Settings:
    """Read settings from the environment.

    Raises:
        InvalidConfigError: If an environment value fails validation
    """
    try:
        return get_settings()
    except ValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error["loc"]) or "settings"
        raise InvalidConfigError(key, error.get("input"), error["msg"]) from e


def main() -> int:
    """Console entry point."""
    try:
        settings = load_settings()
        init_logging(json_format=settings.log_json, level=settings.log_level)
        asyncio.run(run(settings))
    except RelayError as e:
        logger.error("blendrelay_failed", **e.to_dict())
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
