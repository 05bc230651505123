"""Outbound peer messaging."""

import logging

from ..config import CHAT_DESTINATION
from ..errors import PublishError
from .connection import ConnectionManager
from .models import ChatMessage, ConnectionState
from .store import MessageStore

logger = logging.getLogger(__name__)


class ChatSession:
    """Compose buffer plus validated, fire-and-forget sending.

    Sent messages are not echoed into the store locally; the server
    delivers them back on the sender's own topic.
    """

    def __init__(self, connection: ConnectionManager):
        self._connection = connection
        self._recipient = ""
        self._content = ""

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    @property
    def messages(self) -> MessageStore:
        return self._connection.store

    @property
    def recipient(self) -> str:
        return self._recipient

    @property
    def content(self) -> str:
        return self._content

    def connect(self, identity: str) -> bool:
        return self._connection.connect(identity)

    def disconnect(self) -> None:
        self._connection.disconnect()

    def compose(self, recipient: str, content: str) -> None:
        """Replace the compose buffer. No validation happens here."""
        self._recipient = recipient
        self._content = content

    def can_send(self) -> bool:
        """Whether `send()` would currently publish."""
        return (
            self._connection.state is ConnectionState.CONNECTED
            and bool(self._recipient.strip())
            and bool(self._content.strip())
        )

    def send(self) -> bool:
        """Publish the composed message.

        Returns:
            True if the message was handed to the transport and the content
            buffer cleared; False if rejected or the publish call failed
            (the buffer is then left untouched)
        """
        if not self.can_send():
            return False

        message = ChatMessage(
            sender=self._connection.identity,
            recipient=self._recipient.strip(),
            content=self._content.strip(),
        )
        try:
            self._connection.publish(CHAT_DESTINATION, message.to_payload())
        except PublishError as exc:
            logger.warning("Publish to %s failed: %s", CHAT_DESTINATION, exc)
            return False

        self._content = ""
        return True
