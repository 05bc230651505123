"""Session factory functions for CLI.

Centralizes creation of chat and assistant sessions from settings.
Hides wiring details from command implementations.
"""

from ..assistant import AssistantSession, Transcript, create_assistant_client
from ..chat import ChatSession, ConnectionManager, MessageStore
from ..config import DEFAULT_GREETING, Settings
from ..transport import create_transport


def build_chat_session(settings: Settings) -> ChatSession:
    """Create an unconnected peer chat session.

    Each `connect()` builds a fresh STOMP transport for the configured
    WebSocket endpoint.
    """
    connection = ConnectionManager(
        MessageStore(),
        lambda: create_transport(
            "stomp",
            url=settings.websocket_url,
            reconnect_delay=settings.reconnect_delay,
        ),
    )
    return ChatSession(connection)


def build_assistant_session(settings: Settings, greeting: bool = True) -> AssistantSession:
    """Create an assistant session against `settings.api_base`.

    Args:
        settings: Resolved settings
        greeting: Seed the transcript with the assistant's greeting

    Returns:
        AssistantSession owning a fresh HTTP client
    """
    client = create_assistant_client("http", api_base=settings.api_base)
    transcript = Transcript(greeting=DEFAULT_GREETING if greeting else None)
    return AssistantSession(client, transcript)
