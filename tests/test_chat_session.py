"""Unit tests for outbound peer messaging."""
import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from amichat.chat import ChatMessage, ChatSession, ConnectionManager, MessageStore

from conftest import FakeTransport


def _connected_session() -> tuple[ChatSession, FakeTransport]:
    transport = FakeTransport()
    session = ChatSession(ConnectionManager(MessageStore(), lambda: transport))
    session.connect("alice")
    transport.simulate_connect()
    return session, transport


class TestSend:
    """Tests for ChatSession.send()."""

    def test_send_publishes_payload(self, chat_session, transports):
        """Scenario: alice sends 'hi' to bob."""
        chat_session.connect("alice")
        transports[0].simulate_connect()
        chat_session.compose("bob", "hi")

        assert chat_session.send() is True

        assert len(transports[0].published) == 1
        destination, body = transports[0].published[0]
        assert destination == "/app/chat"
        assert json.loads(body) == {"sender": "alice", "recipient": "bob", "content": "hi"}
        assert chat_session.content == ""
        assert chat_session.recipient == "bob"

    def test_send_trims_fields(self, chat_session, transports):
        chat_session.connect("alice")
        transports[0].simulate_connect()
        chat_session.compose("  bob ", "  hi there  ")

        chat_session.send()

        body = json.loads(transports[0].published[0][1])
        assert body == {"sender": "alice", "recipient": "bob", "content": "hi there"}

    def test_send_does_not_echo_locally(self, chat_session, transports):
        """Test that the store only fills from inbound frames."""
        chat_session.connect("alice")
        transports[0].simulate_connect()
        chat_session.compose("bob", "hi")
        chat_session.send()

        assert len(chat_session.messages) == 0

    def test_send_rejected_while_disconnected(self, chat_session, transports):
        chat_session.compose("bob", "hi")

        assert chat_session.send() is False
        assert chat_session.content == "hi"
        assert transports == []

    def test_send_rejected_while_connecting(self, chat_session, transports):
        chat_session.connect("alice")
        chat_session.compose("bob", "hi")

        assert chat_session.send() is False
        assert chat_session.content == "hi"
        assert transports[0].published == []

    def test_send_rejected_after_transport_loss(self, chat_session, transports):
        chat_session.connect("alice")
        transports[0].simulate_connect()
        transports[0].simulate_close()
        chat_session.compose("bob", "hi")

        assert chat_session.send() is False
        assert transports[0].published == []

    @given(
        recipient=st.sampled_from(["", " ", "\t", "bob"]),
        content=st.sampled_from(["", "  ", "\n", "hi"]),
    )
    def test_blank_fields_are_rejected(self, recipient: str, content: str):
        """Property test: send() publishes only when both fields are non-blank."""
        session, transport = _connected_session()
        session.compose(recipient, content)

        sent = session.send()

        should_send = bool(recipient.strip()) and bool(content.strip())
        assert sent is should_send
        assert len(transport.published) == (1 if should_send else 0)
        assert session.content == ("" if should_send else content)

    def test_publish_failure_keeps_buffer(self, chat_session, transports):
        """Test that a failed publish is swallowed and nothing is cleared."""
        chat_session.connect("alice")
        transports[0].simulate_connect()
        transports[0].fail_publish = True
        chat_session.compose("bob", "hi")

        assert chat_session.send() is False
        assert chat_session.content == "hi"


class TestCompose:
    """Tests for the compose buffer."""

    def test_compose_stores_without_validation(self, chat_session):
        chat_session.compose("", "   ")
        assert chat_session.recipient == ""
        assert chat_session.content == "   "

    def test_can_send_tracks_state(self, chat_session, transports):
        chat_session.compose("bob", "hi")
        assert not chat_session.can_send()

        chat_session.connect("alice")
        transports[0].simulate_connect()
        assert chat_session.can_send()


class TestChatMessage:
    """Tests for the ChatMessage model."""

    def test_message_is_frozen(self):
        message = ChatMessage(sender="a", recipient="b", content="c")
        with pytest.raises(ValueError):
            message.content = "changed"  # type: ignore[misc]

    def test_payload_has_no_timestamp(self):
        message = ChatMessage(sender="a", recipient="b", content="c", timestamp="10:00")
        assert json.loads(message.to_payload()) == {"sender": "a", "recipient": "b", "content": "c"}

    def test_null_timestamp_is_stamped(self):
        message = ChatMessage.model_validate(
            {"sender": "a", "recipient": "b", "content": "c", "timestamp": None}
        )
        assert message.timestamp
