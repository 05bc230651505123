"""Turn-taking with the AI assistant.

The user's turn is recorded in the transcript before the request is
issued and stays there whatever the outcome, so a failed turn can simply
be resubmitted or followed up.
"""

import logging
from collections.abc import Callable
from typing import Any

from ..config import ASSISTANT_ERROR_MESSAGE, EMPTY_REPLY_PLACEHOLDER
from ..errors import AssistantRequestError
from .base import AssistantClient
from .models import AssistantRequest, AssistantState, Role
from .transcript import Transcript

logger = logging.getLogger(__name__)

StateListener = Callable[[AssistantState, AssistantState], None]


class AssistantSession:
    """One conversation with the assistant, one request at a time."""

    def __init__(self, client: AssistantClient, transcript: Transcript | None = None):
        """Initialize the session.

        Args:
            client: Endpoint used for every turn
            transcript: Existing transcript to continue (default: empty)
        """
        self._client = client
        self._transcript = transcript if transcript is not None else Transcript()
        self._state = AssistantState.IDLE
        self._error: str | None = None
        self._last_exception: AssistantRequestError | None = None
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> AssistantState:
        return self._state

    @property
    def is_typing(self) -> bool:
        """Whether a reply is being waited for."""
        return self._state is AssistantState.AWAITING_REPLY

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def error(self) -> str | None:
        """Human-readable message for the last failed turn, if any."""
        return self._error

    @property
    def last_exception(self) -> AssistantRequestError | None:
        return self._last_exception

    def on_state_change(self, listener: StateListener) -> None:
        """Register `listener(old, new)`, called after every transition."""
        self._listeners.append(listener)

    async def submit(self, prompt: str) -> bool:
        """Send a prompt as the next user turn.

        Args:
            prompt: User text; surrounding whitespace is ignored

        Returns:
            True if the turn was accepted (check `error` for its outcome),
            False if ignored because the prompt is blank or a reply is
            still pending
        """
        if self._state is not AssistantState.IDLE:
            return False
        message = prompt.strip()
        if not message:
            return False

        history = self._transcript.to_history()
        self._transcript.append(Role.USER, message)
        self._error = None
        self._last_exception = None
        self._set_state(AssistantState.AWAITING_REPLY)

        try:
            reply = await self._client.send(
                AssistantRequest(message=message, history=history)
            )
        except AssistantRequestError as e:
            logger.warning("Assistant request failed: %s", e)
            self._error = ASSISTANT_ERROR_MESSAGE
            self._last_exception = e
        else:
            self._transcript.append(Role.ASSISTANT, reply.reply or EMPTY_REPLY_PLACEHOLDER)
        finally:
            self._set_state(AssistantState.IDLE)

        return True

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()

    async def __aenter__(self) -> "AssistantSession":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _set_state(self, new: AssistantState) -> None:
        old = self._state
        if new is old:
            return
        self._state = new
        logger.debug("Assistant %s -> %s", old.value, new.value)
        for listener in list(self._listeners):
            listener(old, new)
