from abc import ABC, abstractmethod
from typing import Any

from .models import AssistantReply, AssistantRequest


class AssistantClient(ABC):
    """Abstract base class for AI assistant endpoints.

    This module hides the design decision of how a prompt reaches the
    assistant. Implementations must handle:
    - Client setup and connection reuse
    - Request/response format conversion
    - Mapping every failure to AssistantRequestError

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            reply = await client.send(request)
    """

    @abstractmethod
    async def send(self, request: AssistantRequest) -> AssistantReply:
        """Issue exactly one request to the assistant.

        Args:
            request: New prompt plus prior conversation history

        Returns:
            AssistantReply (the reply text may be absent)

        Raises:
            AssistantRequestError: On network failure or non-success status
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "AssistantClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
