"""
Operation-wide deadline shared by transport calls and backoff sleeps.
"""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

from gcm_sender.retry.exceptions import DeadlineExceededError

T = TypeVar("T")


class Deadline:
    """
    Remaining time budget of one send operation.

    A Deadline created with timeout=None never expires and runs calls
    unbounded.
    """

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout
        self._expires_at: float | None = None
        if timeout is not None:
            self._expires_at = asyncio.get_running_loop().time() + timeout

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return self._expires_at - asyncio.get_running_loop().time()

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        """
        Await func(*args), cancelling it when the deadline passes.

        Raises:
            DeadlineExceededError: If no time is left or the call overruns
        """
        remaining = self.remaining()
        if remaining is None:
            return await func(*args)
        if remaining <= 0:
            raise DeadlineExceededError(self.timeout)
        try:
            return await asyncio.wait_for(func(*args), remaining)
        except asyncio.TimeoutError as e:
            raise DeadlineExceededError(self.timeout) from e
