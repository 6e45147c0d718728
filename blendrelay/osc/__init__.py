"""OSC message encoding for blendshapes.

Components:
- ProtocolMessage: address + single float argument
- encode_message: blendshape -> OSC datagram
- decode_message: OSC datagram -> ProtocolMessage
"""

from blendrelay.osc.codec import ProtocolMessage, decode_message, encode_message

__all__ = [
    "ProtocolMessage",
    "decode_message",
    "encode_message",
]
