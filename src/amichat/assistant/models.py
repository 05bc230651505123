"""Data models for the assistant channel."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..config import build_timestamp


class Role(str, Enum):
    """Author of a transcript turn."""

    USER = "user"
    ASSISTANT = "assistant"


class AssistantState(str, Enum):
    """Turn-taking state; AWAITING_REPLY means one request is in flight."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class TranscriptEntry(BaseModel):
    """One turn of the assistant conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who produced the turn")
    content: str = Field(description="Turn text")
    timestamp: str = Field(default_factory=build_timestamp)


class HistoryItem(BaseModel):
    """A prior turn as sent to the AI endpoint."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class AssistantRequest(BaseModel):
    """Body of a POST to the AI chat endpoint."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="The new prompt")
    history: list[HistoryItem] = Field(
        default_factory=list,
        description="Prior turns, oldest first"
    )


class AssistantReply(BaseModel):
    """Successful response from the AI chat endpoint."""

    model_config = ConfigDict(frozen=True)

    reply: str | None = Field(default=None, description="Assistant text, may be absent")
