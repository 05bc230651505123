"""Assistant channel for amichat.

Transcript bookkeeping and one-turn-at-a-time requests to the AI endpoint.
"""

from .base import AssistantClient
from .factory import create_assistant_client
from .models import (
    AssistantReply,
    AssistantRequest,
    AssistantState,
    HistoryItem,
    Role,
    TranscriptEntry,
)
from .providers import HttpAssistantClient
from .session import AssistantSession
from .transcript import Transcript

__all__ = [
    "AssistantClient",
    "AssistantReply",
    "AssistantRequest",
    "AssistantSession",
    "AssistantState",
    "HistoryItem",
    "HttpAssistantClient",
    "Role",
    "Transcript",
    "TranscriptEntry",
    "create_assistant_client",
]
