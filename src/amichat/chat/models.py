"""Data models for the peer chat channel."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import build_timestamp


class ConnectionState(str, Enum):
    """Lifecycle state of the pub/sub link."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ConnectionEvent(str, Enum):
    """Named events driving ConnectionState transitions."""

    CONNECT_REQUESTED = "connect_requested"
    TRANSPORT_CONNECTED = "transport_connected"
    TRANSPORT_FAILED = "transport_failed"
    TRANSPORT_CLOSED = "transport_closed"
    DISCONNECT_REQUESTED = "disconnect_requested"


class ChatMessage(BaseModel):
    """A peer-to-peer chat message.

    Wire payloads carry sender, recipient and content; the server adds a
    timestamp on delivery. Messages without one are stamped locally.
    """

    model_config = ConfigDict(frozen=True)

    sender: str = Field(description="Identity of the author")
    recipient: str = Field(description="Identity of the addressee")
    content: str = Field(description="Message text")
    timestamp: str = Field(default_factory=build_timestamp)

    @field_validator("sender", "recipient", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only fields."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def default_missing_timestamp(cls, v: object) -> object:
        return build_timestamp() if v is None else v

    def to_payload(self) -> str:
        """Serialize the outbound wire body (no timestamp)."""
        return self.model_dump_json(include={"sender", "recipient", "content"})
