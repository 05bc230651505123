"""Exception hierarchy for amichat.

Every failure in the session core resolves to a well-defined state
(DISCONNECTED for the pub/sub channel, IDLE for the assistant), so none of
these is fatal to the process.
"""


class AmiChatError(Exception):
    """Base class for all amichat errors."""


class TransportConnectionError(AmiChatError):
    """The pub/sub transport failed to open or dropped unexpectedly.

    Recovered by the transport's own retry loop; callers only observe a
    DISCONNECTED connection state.
    """


class PublishError(AmiChatError):
    """An outbound peer message could not be published."""


class AssistantRequestError(AmiChatError):
    """The AI endpoint call failed.

    Covers both network failures and non-success HTTP statuses.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
