from typing import Any

from .base import AssistantClient
from .providers import HttpAssistantClient


def create_assistant_client(provider: str = "http", **config: Any) -> AssistantClient:
    """Create an assistant client instance.

    Args:
        provider: Client type ('http')
        **config: Client-specific configuration
            For HTTP:
                - api_base: str (required)
                - transport: httpx.AsyncBaseTransport | None

    Returns:
        Initialized assistant client

    Raises:
        ValueError: If client type is not supported
        TypeError: If required configuration is missing
    """
    provider_lower = provider.lower()

    if provider_lower == "http":
        if "api_base" not in config:
            raise TypeError("HTTP assistant client requires 'api_base' in config")
        return HttpAssistantClient(**config)

    raise ValueError(
        f"Unsupported assistant client: {provider}. "
        f"Supported clients: 'http'"
    )
