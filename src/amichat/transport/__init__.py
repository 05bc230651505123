"""Pub/sub transport module for amichat.

Carries peer chat frames; the session layer only sees `PubSubTransport`.
"""

from .base import MessageHandler, PubSubTransport, TransportListener
from .factory import create_transport
from .stomp import StompFrame, StompProtocolError, parse_frames
from .websocket import StompWebSocketTransport

__all__ = [
    "MessageHandler",
    "PubSubTransport",
    "TransportListener",
    "create_transport",
    "StompFrame",
    "StompProtocolError",
    "parse_frames",
    "StompWebSocketTransport",
]
