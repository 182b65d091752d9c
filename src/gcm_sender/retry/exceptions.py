"""
Retry engine exceptions.

Raised when a caller-supplied deadline expires before any usable result was
obtained. Once a result exists, the engines return it instead of raising.
"""

from gcm_sender.exceptions import GCMError


class DeadlineExceededError(GCMError):
    """
    Raised when the operation deadline expires before the first response.

    Attributes:
        timeout: The deadline that was exceeded, in seconds
    """

    def __init__(self, timeout: float, details: dict | None = None):
        super().__init__(f"deadline of {timeout}s exceeded", details)
        self.timeout = timeout
