"""Pub/sub connection lifecycle.

The manager owns the transport for one identity. Transport notifications
are turned into named events and fed through a transition table, so the
observable ConnectionState only changes along defined edges.
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from ..config import topic_for
from ..errors import PublishError, TransportConnectionError
from ..transport import PubSubTransport
from .models import ChatMessage, ConnectionEvent, ConnectionState
from .store import MessageStore

logger = logging.getLogger(__name__)

StateListener = Callable[[ConnectionState, ConnectionState], None]
TransportFactory = Callable[[], PubSubTransport]

_D = ConnectionState.DISCONNECTED
_CING = ConnectionState.CONNECTING
_C = ConnectionState.CONNECTED

TRANSITIONS: dict[tuple[ConnectionState, ConnectionEvent], ConnectionState] = {
    (_D, ConnectionEvent.CONNECT_REQUESTED): _CING,
    (_CING, ConnectionEvent.TRANSPORT_CONNECTED): _C,
    (_CING, ConnectionEvent.TRANSPORT_FAILED): _D,
    (_CING, ConnectionEvent.TRANSPORT_CLOSED): _D,
    (_C, ConnectionEvent.TRANSPORT_FAILED): _D,
    (_C, ConnectionEvent.TRANSPORT_CLOSED): _D,
    # Transport reopened itself after a loss
    (_D, ConnectionEvent.TRANSPORT_CONNECTED): _C,
    (_D, ConnectionEvent.DISCONNECT_REQUESTED): _D,
    (_CING, ConnectionEvent.DISCONNECT_REQUESTED): _D,
    (_C, ConnectionEvent.DISCONNECT_REQUESTED): _D,
}


class ConnectionManager:
    """Owns the pub/sub transport and the identity-scoped subscription.

    The transport is created on `connect()` and released on `disconnect()`.
    After an unexpected loss it is kept so it can reopen itself; a later
    successful reopen re-subscribes and returns to CONNECTED.
    """

    def __init__(self, store: MessageStore, transport_factory: TransportFactory):
        """Initialize the manager.

        Args:
            store: Receives every decoded inbound message
            transport_factory: Builds a fresh, inactive transport per connect
        """
        self._store = store
        self._transport_factory = transport_factory
        self._transport: PubSubTransport | None = None
        self._identity: str | None = None
        self._state = ConnectionState.DISCONNECTED
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def identity(self) -> str | None:
        """Identity captured by the last accepted `connect()`."""
        return self._identity

    @property
    def store(self) -> MessageStore:
        return self._store

    def on_state_change(self, listener: StateListener) -> None:
        """Register `listener(old, new)`, called after every transition."""
        self._listeners.append(listener)

    def connect(self, identity: str) -> bool:
        """Open the transport for an identity.

        Args:
            identity: Local user name; surrounding whitespace is ignored

        Returns:
            True if a connection attempt was started, False for a no-op
            (blank identity, or already connecting/connected)

        Raises:
            TransportConnectionError: If the transport could not be started;
                the manager is back in DISCONNECTED
        """
        identity = identity.strip()
        if not identity or self._state is not ConnectionState.DISCONNECTED:
            return False

        if self._transport is not None:
            # A transport still retrying after a loss is replaced
            self._transport.deactivate()

        self._identity = identity
        self._transport = self._transport_factory()
        self._handle(ConnectionEvent.CONNECT_REQUESTED)
        try:
            self._transport.activate(self)
        except Exception as exc:
            transport, self._transport = self._transport, None
            transport.deactivate()
            self._handle(ConnectionEvent.TRANSPORT_FAILED)
            raise TransportConnectionError(f"Could not start transport: {exc}") from exc
        return True

    def disconnect(self) -> None:
        """Tear down the transport regardless of the current state."""
        transport, self._transport = self._transport, None
        if transport is not None:
            transport.deactivate()
        self._handle(ConnectionEvent.DISCONNECT_REQUESTED)

    def publish(self, destination: str, body: str) -> None:
        """Publish through the live transport.

        Raises:
            PublishError: If there is no transport or it rejects the message
        """
        if self._transport is None:
            raise PublishError("No transport: call connect() first")
        self._transport.publish(destination, body)

    # TransportListener

    def transport_connected(self, transport: PubSubTransport) -> None:
        if transport is not self._transport or self._identity is None:
            return
        transport.subscribe(topic_for(self._identity), self._on_frame)
        self._handle(ConnectionEvent.TRANSPORT_CONNECTED)

    def transport_closed(self, transport: PubSubTransport, error: Exception | None) -> None:
        if transport is not self._transport:
            return
        if error is not None:
            self._handle(ConnectionEvent.TRANSPORT_FAILED)
        else:
            self._handle(ConnectionEvent.TRANSPORT_CLOSED)

    def _on_frame(self, body: str) -> None:
        try:
            message = ChatMessage.model_validate_json(body)
        except ValidationError as exc:
            logger.warning(
                "Dropping malformed frame (%d error(s)): %.200r",
                exc.error_count(), body
            )
            return
        self._store.add(message)

    def _handle(self, event: ConnectionEvent) -> None:
        old = self._state
        new = TRANSITIONS.get((old, event))
        if new is None:
            logger.debug("Ignoring %s in state %s", event.value, old.value)
            return

        self._state = new
        if new is old:
            return

        logger.info("Connection %s -> %s (%s)", old.value, new.value, event.value)
        for listener in list(self._listeners):
            listener(old, new)
