"""Peer chat channel for amichat.

Connection lifecycle, inbound message log and outbound sending.
"""

from .connection import ConnectionManager
from .models import ChatMessage, ConnectionEvent, ConnectionState
from .session import ChatSession
from .store import MessageStore

__all__ = [
    "ChatMessage",
    "ChatSession",
    "ConnectionEvent",
    "ConnectionManager",
    "ConnectionState",
    "MessageStore",
]
