"""Abstract base class for pub/sub transports."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol

# Receives the raw body of each frame delivered on a subscription
MessageHandler = Callable[[str], None]


class TransportListener(Protocol):
    """Receives lifecycle notifications from a transport.

    Notifications are delivered on the event loop that activated the
    transport, one at a time.
    """

    def transport_connected(self, transport: "PubSubTransport") -> None:
        """Called each time the transport (re)establishes its session."""
        ...

    def transport_closed(
        self,
        transport: "PubSubTransport",
        error: Exception | None
    ) -> None:
        """Called when an open attempt fails or an established session ends."""
        ...


class PubSubTransport(ABC):
    """Abstract publish/subscribe transport.

    This module hides the design decision of which wire protocol and socket
    library carry peer messages. Implementations own:
    - Socket setup and protocol handshake
    - Automatic reopening at a fixed interval after a loss
    - Subscription bookkeeping (subscriptions end with the session)
    - Frame encoding and decoding

    Activation is non-blocking: completion is reported to the listener.
    """

    @abstractmethod
    def activate(self, listener: TransportListener) -> None:
        """Start opening the transport and keep it open until deactivated.

        Args:
            listener: Receives connect/close notifications
        """

    @abstractmethod
    def deactivate(self) -> None:
        """Tear down the transport and stop reopening it.

        No listener notifications are delivered after this call.
        """

    @abstractmethod
    def subscribe(self, destination: str, handler: MessageHandler) -> str:
        """Subscribe to a destination on the current session.

        Args:
            destination: Topic to subscribe to
            handler: Called with the body of each delivered frame

        Returns:
            Subscription identifier

        Raises:
            TransportConnectionError: If the transport is not connected
        """

    @abstractmethod
    def publish(self, destination: str, body: str) -> None:
        """Publish a body to a destination without waiting for delivery.

        Raises:
            PublishError: If the transport cannot accept the message
        """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether a session is currently established."""
