"""OSC Codec - One blendshape per OSC message.

Each blendshape becomes a single OSC message addressed ``/<name>`` with
one float32 argument (type tag ``,f``). Encoding is delegated to
python-osc; this module only fixes the message shape and maps codec
failures onto the relay exception hierarchy.

Usage:
    datagram = encode_message("jawOpen", 0.75)
    message = decode_message(datagram)
    assert message.address == "/jawOpen"
"""

from dataclasses import dataclass

from pythonosc.osc_message import OscMessage, ParseError
from pythonosc.osc_message_builder import BuildError, OscMessageBuilder

from blendrelay.config.constants import RELAY
from blendrelay.exceptions import DecodeError, EncodeError


@dataclass(frozen=True)
class ProtocolMessage:
    """A single addressed OSC message carrying one float."""

    address: str
    value: float

    @classmethod
    def for_blendshape(cls, name: str, value: float) -> "ProtocolMessage":
        """Build the message for one blendshape entry.

        The name is not checked for OSC-reserved characters.
        """
        return cls(address=f"{RELAY.OSC_ADDRESS_PREFIX}{name}", value=value)

    @property
    def name(self) -> str:
        """Blendshape name (address without the leading slash)."""
        return self.address.removeprefix(RELAY.OSC_ADDRESS_PREFIX)

    def encode(self) -> bytes:
        """Serialize to an OSC datagram.

        Raises:
            EncodeError: If the address or value cannot be serialized
        """
        builder = OscMessageBuilder(address=self.address)
        try:
            builder.add_arg(float(self.value), RELAY.OSC_FLOAT_TAG)
            return builder.build().dgram
        except (BuildError, OverflowError, UnicodeEncodeError, TypeError, ValueError) as e:
            raise EncodeError(self.name, str(e)) from e


def encode_message(name: str, value: float) -> bytes:
    """Encode one blendshape as an OSC datagram.

    Args:
        name: Blendshape name, sent as address ``/<name>``
        value: Weight; NaN and infinities are passed through unchanged

    Returns:
        Encoded datagram bytes

    Raises:
        EncodeError: If the message cannot be serialized (e.g. value outside
            float32 range, name not encodable as UTF-8)
    """
    return ProtocolMessage.for_blendshape(name, value).encode()


def decode_message(datagram: bytes) -> ProtocolMessage:
    """Parse a single-float OSC datagram.

    Raises:
        DecodeError: If the datagram is not an OSC message with exactly one
            float argument
    """
    try:
        message = OscMessage(datagram)
    except (ParseError, UnicodeDecodeError) as e:
        raise DecodeError(str(e)) from e

    params = message.params
    if len(params) != 1 or not isinstance(params[0], float):
        raise DecodeError(f"expected one float argument, got {params!r}")

    return ProtocolMessage(address=message.address, value=params[0])
