import logging

import httpx
from pydantic import ValidationError

from ...config import AI_CHAT_PATH, REQUEST_TIMEOUT
from ...errors import AssistantRequestError
from ..base import AssistantClient
from ..models import AssistantReply, AssistantRequest

logger = logging.getLogger(__name__)


class HttpAssistantClient(AssistantClient):
    """AI chat endpoint reached over HTTP JSON.

    Hidden design decisions:
    - httpx client initialization and connection reuse
    - Endpoint path and JSON body shape
    - Status handling: any non-2xx is a failure, whatever the body says
    """

    def __init__(
        self,
        api_base: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the HTTP client.

        Args:
            api_base: Origin of the AI endpoint, e.g. http://localhost:8080
            transport: Optional httpx transport (used to stub the network)
        """
        self._api_base = api_base.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._api_base,
            timeout=REQUEST_TIMEOUT,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self._api_base}{AI_CHAT_PATH}"

    async def send(self, request: AssistantRequest) -> AssistantReply:
        logger.debug(
            "POST %s (%d history item(s))", self.endpoint, len(request.history)
        )
        try:
            response = await self._client.post(
                AI_CHAT_PATH,
                json=request.model_dump(mode="json"),
            )
        except httpx.HTTPError as e:
            raise AssistantRequestError(
                f"Request to {self.endpoint} failed: {e}"
            ) from e

        if not response.is_success:
            raise AssistantRequestError(
                f"{self.endpoint} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return AssistantReply.model_validate_json(response.content)
        except ValidationError as e:
            raise AssistantRequestError(
                f"{self.endpoint} returned an unreadable body",
                status_code=response.status_code,
            ) from e

    async def close(self) -> None:
        await self._client.aclose()
