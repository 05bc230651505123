from typing import Any

from .base import PubSubTransport
from .websocket import StompWebSocketTransport


def create_transport(kind: str = "stomp", **config: Any) -> PubSubTransport:
    """Create a pub/sub transport instance.

    This factory function hides which wire protocol carries peer messages.

    Args:
        kind: Transport type ('stomp')
        **config: Transport-specific configuration
            For STOMP over WebSocket:
                - url: str (required)
                - reconnect_delay: float (default: 3.0)
                - host: str | None

    Returns:
        Inactive transport; call `activate()` to open it

    Raises:
        ValueError: If transport type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> transport = create_transport(
        ...     "stomp",
        ...     url="ws://localhost:8080/ws/websocket"
        ... )
    """
    kind_lower = kind.lower()

    if kind_lower in ("stomp", "websocket"):
        if "url" not in config:
            raise TypeError("STOMP transport requires 'url' in config")
        return StompWebSocketTransport(**config)

    raise ValueError(
        f"Unsupported transport: {kind}. "
        f"Supported transports: 'stomp'"
    )
