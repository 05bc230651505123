"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from amichat.assistant import AssistantClient, AssistantReply, AssistantRequest
from amichat.chat import ChatSession, ConnectionManager, MessageStore
from amichat.errors import PublishError, TransportConnectionError
from amichat.transport import MessageHandler, PubSubTransport, TransportListener


class FakeTransport(PubSubTransport):
    """In-memory transport driven explicitly by tests."""

    def __init__(self) -> None:
        self.listener: TransportListener | None = None
        self.active = False
        self._connected = False
        self.subscriptions: dict[str, MessageHandler] = {}
        self.subscribe_calls: list[str] = []
        self.published: list[tuple[str, str]] = []
        self.fail_publish = False

    @property
    def connected(self) -> bool:
        return self._connected

    def activate(self, listener: TransportListener) -> None:
        self.listener = listener
        self.active = True

    def deactivate(self) -> None:
        self.active = False
        self._connected = False

    def subscribe(self, destination: str, handler: MessageHandler) -> str:
        if not self._connected:
            raise TransportConnectionError("not connected")
        self.subscriptions[destination] = handler
        self.subscribe_calls.append(destination)
        return f"sub-{len(self.subscribe_calls) - 1}"

    def publish(self, destination: str, body: str) -> None:
        if self.fail_publish or not self._connected:
            raise PublishError("publish failed")
        self.published.append((destination, body))

    # Simulation helpers

    def simulate_connect(self) -> None:
        self._connected = True
        self.subscriptions.clear()
        self.listener.transport_connected(self)

    def simulate_close(self, error: Exception | None = None) -> None:
        self._connected = False
        self.listener.transport_closed(self, error)

    def deliver(self, destination: str, body: str) -> None:
        self.subscriptions[destination](body)


class FakeAssistantClient(AssistantClient):
    """Assistant client returning canned replies.

    Set `gate` to an asyncio.Event to hold requests in flight.
    """

    def __init__(self, reply: str | None = "ok", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: list[AssistantRequest] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def send(self, request: AssistantRequest) -> AssistantReply:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return AssistantReply(reply=self.reply)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def transports():
    """Every transport created by the `connection` fixture, in order."""
    return []


@pytest.fixture
def store():
    return MessageStore()


@pytest.fixture
def connection(store, transports):
    """ConnectionManager backed by fake transports."""
    def factory():
        transport = FakeTransport()
        transports.append(transport)
        return transport

    return ConnectionManager(store, factory)


@pytest.fixture
def connected(connection, transports):
    """ConnectionManager already connected as 'alice'."""
    connection.connect("alice")
    transports[-1].simulate_connect()
    return connection


@pytest.fixture
def chat_session(connection):
    return ChatSession(connection)
