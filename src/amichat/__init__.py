"""
amichat: client-side session core for PTIT AMI Chat.

Coordinates two independent channels for one user: peer chat over a
STOMP/WebSocket pub/sub link, and turn-by-turn conversation with an AI
assistant over HTTP. The channels never share state.
"""

__version__ = "0.1.0"

from .assistant import (
    AssistantSession,
    AssistantState,
    Transcript,
    TranscriptEntry,
    create_assistant_client,
)
from .chat import (
    ChatMessage,
    ChatSession,
    ConnectionManager,
    ConnectionState,
    MessageStore,
)
from .config import Settings, load_settings
from .errors import (
    AmiChatError,
    AssistantRequestError,
    PublishError,
    TransportConnectionError,
)
from .transport import PubSubTransport, create_transport

__all__ = [
    "AmiChatError",
    "AssistantRequestError",
    "AssistantSession",
    "AssistantState",
    "ChatMessage",
    "ChatSession",
    "ConnectionManager",
    "ConnectionState",
    "MessageStore",
    "PubSubTransport",
    "PublishError",
    "Settings",
    "Transcript",
    "TranscriptEntry",
    "TransportConnectionError",
    "create_assistant_client",
    "create_transport",
    "load_settings",
]
