"""
Exceptions shared by the whole sender.

Every error raised by this package derives from GCMError so callers can
catch any sender failure with a single except clause. Transport-specific
errors live in gcm_sender.transport.exceptions, deadline handling in
gcm_sender.retry.exceptions.
"""


class GCMError(Exception):
    """
    Base exception for all sender errors.

    Attributes:
        message: Human-readable description
        details: Structured context for logging
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(GCMError):
    """
    Raised when a send request is rejected before any network activity.

    Examples:
    - Missing API key
    - Missing message or recipient(s)
    - time_to_live outside [0, 4 weeks]
    - Negative retry budget
    """
    pass


class ApplicationError(GCMError):
    """
    An application-level error code reported inside a 200 response.

    The retry engines never raise this: per-recipient errors are recorded on
    the Result. It is raised by Result.raise_for_error() and
    MulticastResult.raise_for_errors() for callers that prefer exceptions.
    """

    def __init__(self, code: str, details: dict | None = None):
        super().__init__(f"application error: {code}", details)
        self.code = code
