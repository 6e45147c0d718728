"""Host Commands - Entry points invoked by the host application.

The host's command dispatcher calls these coroutines. Failures are raised
as RelayError subclasses; ``str(error)`` is the text to show the user and
``error.to_dict()`` is the serializable form.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from blendrelay.config.settings import Settings, get_settings
from blendrelay.exceptions import InvalidBatchError
from blendrelay.relay.batch import BlendshapeBatch
from blendrelay.relay.events import EventSink
from blendrelay.relay.listener import UDPListener, create_listener
from blendrelay.relay.sender import send_batch


async def send_blendshapes(
    batch: BlendshapeBatch | Mapping[str, Any],
    settings: Settings | None = None,
) -> None:
    """Send a blendshape batch as OSC datagrams.

    Args:
        batch: BlendshapeBatch or raw ``{"data": {...}, "port": N}`` payload
        settings: Settings override (defaults to cached settings)

    Raises:
        InvalidBatchError: If a raw payload fails validation
        RelayError: Any sender failure (bind, address, encode, send)
    """
    settings = settings or get_settings()

    if not isinstance(batch, BlendshapeBatch):
        try:
            batch = BlendshapeBatch.model_validate(batch)
        except ValidationError as e:
            raise InvalidBatchError(str(e)) from e

    await send_batch(batch, host=settings.target_host)


async def start_udp_listener(
    sink: EventSink,
    settings: Settings | None = None,
    listener: UDPListener | None = None,
) -> None:
    """Run the UDP listener until it is stopped.

    Args:
        sink: Host event sink receiving ``udp-message`` events
        settings: Settings override (defaults to cached settings)
        listener: Pre-built listener; lets the caller keep a handle to stop it

    Raises:
        BindError: If the listener endpoint is unavailable
        EventSinkError: If the sink fails while running
    """
    if listener is None:
        listener = create_listener(sink, settings or get_settings())
    await listener.run()
