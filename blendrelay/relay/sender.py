"""Blendshape Sender - One OSC datagram per blendshape.

Sends a BlendshapeBatch to ``<host>:<port>`` over UDP. Every entry is
encoded and sent as its own datagram from a socket that lives only for
the duration of the call.

Failure semantics:
- The first entry that fails to encode or send aborts the batch
- The raised error names that entry
- Entries sent before the failure are not retried or rolled back

Usage:
    batch = BlendshapeBatch(data={"jawOpen": 0.75}, port=9000)
    sent = await send_batch(batch)
"""

from blendrelay.config.constants import RELAY
from blendrelay.exceptions import BindError, EncodeError, SendError
from blendrelay.observability.logging import SenderLogger
from blendrelay.osc.codec import encode_message
from blendrelay.relay.batch import BlendshapeBatch
from blendrelay.transport.udp import UDPSocket, resolve_target


async def send_batch(
    batch: BlendshapeBatch,
    host: str = RELAY.TARGET_HOST,
) -> int:
    """Send every blendshape in the batch as an OSC datagram.

    Args:
        batch: Blendshape weights and destination port
        host: Destination IPv4 host

    Returns:
        Number of datagrams sent (always ``len(batch)``)

    Raises:
        BindError: If the ephemeral socket cannot be bound
        AddressError: If ``host:port`` is not a valid destination
        EncodeError: If an entry cannot be encoded
        SendError: If the transport rejects an entry's datagram
    """
    log = SenderLogger(port=batch.port)

    try:
        sock = await UDPSocket.bind(RELAY.SENDER_BIND_HOST, RELAY.SENDER_BIND_PORT)
    except OSError as e:
        raise BindError(RELAY.SENDER_BIND_HOST, RELAY.SENDER_BIND_PORT, str(e)) from e

    sent = 0
    async with sock:
        target = resolve_target(host, batch.port)

        for name, value in batch.items():
            try:
                datagram = encode_message(name, value)
            except EncodeError as e:
                log.entry_failed(name, e.message, sent)
                raise

            try:
                await sock.send_to(datagram, target)
            except OSError as e:
                log.entry_failed(name, str(e), sent)
                raise SendError(name, str(e)) from e

            sent += 1

    log.batch_sent(sent)
    return sent
