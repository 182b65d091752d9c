"""
Custom exceptions for the transport layer.

These exceptions let the retry engines tell a retryable server failure
(HTTP 5xx) apart from terminal failures (bad request, authentication,
network errors, unreadable bodies).
"""

from gcm_sender.exceptions import GCMError


class TransportError(GCMError):
    """
    Raised when the connection server does not answer with HTTP 200.

    Reference: 400 means bad JSON or invalid fields, 401 means the sender
    failed to authenticate, 5xx means the connection server had an internal
    error and the request can be retried later.

    Attributes:
        status_code: HTTP status code (None when no response was received)
        status: Status line, e.g. "400 Bad Request"
    """

    def __init__(
        self,
        status_code: int | None,
        status: str = "",
        details: dict | None = None,
    ):
        super().__init__(f"{status_code} error: {status}", details)
        self.status_code = status_code
        self.status = status


class TransportConnectionError(TransportError):
    """
    Raised when no HTTP response was received at all.

    Includes DNS failures, refused connections and dropped sockets. These
    carry no status code and are therefore never retried by the engines.
    """

    def __init__(self, message: str, details: dict | None = None):
        GCMError.__init__(self, message, details)
        self.status_code = None
        self.status = ""


class TransportTimeoutError(TransportConnectionError):
    """Raised when the HTTP request exceeds the configured timeout."""
    pass


class ResponseDecodeError(GCMError):
    """
    Raised when a 200 response body cannot be interpreted.

    Examples:
    - Body is not valid JSON
    - Single-target response with a results array whose length is not 1
    - Topic response carrying neither message_id nor error
    """
    pass
