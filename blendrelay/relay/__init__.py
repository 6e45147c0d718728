"""Blendshape relay flows.

Components:
- BlendshapeBatch: weights + destination port
- send_batch: one OSC datagram per blendshape
- UDPListener: inbound text datagrams -> host events
- QueueEventSink / CallbackEventSink: EventSink implementations
"""

from __future__ import annotations

from blendrelay.relay.batch import BlendshapeBatch
from blendrelay.relay.events import CallbackEventSink, EventSink, QueueEventSink
from blendrelay.relay.listener import (
    ListenerConfig,
    UDPListener,
    create_listener,
)
from blendrelay.relay.sender import send_batch

__all__ = [
    "BlendshapeBatch",
    "CallbackEventSink",
    "EventSink",
    "ListenerConfig",
    "QueueEventSink",
    "UDPListener",
    "create_listener",
    "send_batch",
]
