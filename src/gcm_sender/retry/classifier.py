"""
Retryability rules for connection server failures.

Two independent rules:
- Transport level: a non-200 status is retryable iff it is a 5xx.
- Application level: an error code inside a 200 response is retryable iff
  it is Unavailable or InternalServerError.
"""

from gcm_sender.models.enums import ErrorCode
from gcm_sender.transport.exceptions import TransportError


RETRYABLE_ERROR_CODES = frozenset(
    {ErrorCode.UNAVAILABLE.value, ErrorCode.INTERNAL_SERVER_ERROR.value}
)


def is_retryable_status(status_code: int | None) -> bool:
    """Return True for HTTP 500-599."""
    return status_code is not None and 500 <= status_code <= 599


def is_retryable_error_code(code: str | None) -> bool:
    """Return True for the two transient application error codes."""
    return code in RETRYABLE_ERROR_CODES


def is_retryable_transport_error(error: BaseException) -> bool:
    """
    Return True if a failed call may be repeated as a whole.

    Only TransportError carrying a 5xx status qualifies. Network failures
    without a status and undecodable bodies are terminal.
    """
    return isinstance(error, TransportError) and is_retryable_status(error.status_code)
