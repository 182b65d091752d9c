"""
Jittered exponential backoff.

Each delay is drawn from [backoff/2, 3*backoff/2) and the base then doubles,
capped at the configured maximum. A policy holds per-call state, so every
top-level send creates its own instance.
"""

import random

from gcm_sender.config import (
    BACKOFF_INITIAL_DELAY_MS,
    MAX_BACKOFF_DELAY_MS,
    Settings,
)


class BackoffPolicy:
    """
    Capped exponential backoff with jitter.

    Attributes:
        backoff_ms: Base of the next delay, in milliseconds
        max_delay_ms: Cap applied to backoff_ms after each doubling
    """

    def __init__(
        self,
        initial_delay_ms: int = BACKOFF_INITIAL_DELAY_MS,
        max_delay_ms: int = MAX_BACKOFF_DELAY_MS,
        rng: random.Random | None = None,
    ):
        if initial_delay_ms < 1:
            raise ValueError("initial_delay_ms must be >= 1")
        if max_delay_ms < initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")

        self.backoff_ms = initial_delay_ms
        self.max_delay_ms = max_delay_ms
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_settings(cls, settings: Settings, rng: random.Random | None = None) -> "BackoffPolicy":
        return cls(
            initial_delay_ms=settings.BACKOFF_INITIAL_DELAY_MS,
            max_delay_ms=settings.MAX_BACKOFF_DELAY_MS,
            rng=rng,
        )

    def next_delay_ms(self) -> int:
        """Return the next delay in milliseconds and advance the base."""
        delay = self.backoff_ms // 2 + self._rng.randrange(self.backoff_ms)
        self.backoff_ms = min(2 * self.backoff_ms, self.max_delay_ms)
        return delay

    def next_delay(self) -> float:
        """Return the next delay in seconds, for asyncio.sleep."""
        return self.next_delay_ms() / 1000.0
