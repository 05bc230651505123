"""In-memory log of inbound peer messages.

Data is held for the lifetime of the session only.
"""

from collections.abc import Callable, Iterator

from .models import ChatMessage

MessageListener = Callable[[ChatMessage], None]


class MessageStore:
    """Ordered log of received chat messages, newest first."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self._listeners: list[MessageListener] = []

    def add(self, message: ChatMessage) -> None:
        """Prepend a message and notify listeners."""
        self._messages.insert(0, message)
        for listener in list(self._listeners):
            listener(message)

    def on_message(self, listener: MessageListener) -> None:
        """Register a callback invoked for every stored message."""
        self._listeners.append(listener)

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        """Snapshot of stored messages, newest first."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.messages)
