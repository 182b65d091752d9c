"""
Whole-call retries for single-target sends.

A message sent to one registration id, a topic or a device group is retried
as a whole when the connection server answers with a 5xx status, or with a
200 whose error is Unavailable / InternalServerError. A device group partial
success carries no error code and is therefore final.
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

import structlog

from gcm_sender.config import Settings
from gcm_sender.exceptions import GCMError
from gcm_sender.models.delivery import decode_delivery, to_result
from gcm_sender.models.message import Message
from gcm_sender.models.results import Result
from gcm_sender.monitoring.metrics import gcm_requests_total, gcm_retries_total
from gcm_sender.retry.backoff import BackoffPolicy
from gcm_sender.retry.classifier import (
    is_retryable_error_code,
    is_retryable_transport_error,
)
from gcm_sender.retry.deadline import Deadline
from gcm_sender.retry.exceptions import DeadlineExceededError
from gcm_sender.transport.base_transport import BaseTransport

logger = structlog.get_logger(__name__)


class SingleRetryEngine:
    """
    Retry engine for single-target messages.

    Attributes:
        transport: Transport used for every attempt
        settings: Application settings (backoff bounds)
    """

    operation = "single"

    def __init__(
        self,
        transport: BaseTransport,
        settings: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize single-target retry engine.

        Args:
            transport: Transport to send through
            settings: Application settings
            sleep: Awaitable sleep used between attempts
            rng: Random source for backoff jitter
        """
        self.transport = transport
        self.settings = settings
        self._sleep = sleep
        self._rng = rng

    async def send_once(self, message: Message, to: str) -> Result:
        """
        Send one request without retrying.

        Raises:
            TransportError: Non-200 status or network failure
            ResponseDecodeError: Body does not match the target kind
        """
        response = await self.transport.send(message.to_payload(to=to))
        return to_result(decode_delivery(to, response))

    async def execute(
        self,
        message: Message,
        to: str,
        retries: int,
        timeout: float | None = None,
    ) -> Result:
        """
        Send with up to `retries` additional attempts.

        Exhausting the budget on a retryable application error returns that
        last Result: the server did answer, just unfavourably. Exhausting it
        on a 5xx raises the TransportError of the final attempt.

        Args:
            message: Message to deliver
            to: Registration id, topic or notification key
            retries: Number of retries after the first attempt
            timeout: Optional deadline for the whole operation, in seconds

        Returns:
            Result of the last attempt

        Raises:
            TransportError: Terminal status, or 5xx on the final attempt
            ResponseDecodeError: Unreadable response
            DeadlineExceededError: Deadline expired before any Result
        """
        backoff = BackoffPolicy.from_settings(self.settings, rng=self._rng)
        deadline = Deadline(timeout)
        last_result: Result | None = None
        attempt = 0

        while True:
            attempt += 1
            result: Result | None = None
            error: GCMError | None = None

            try:
                result = await deadline.run(self.send_once, message, to)
                last_result = result
            except DeadlineExceededError:
                return self._on_deadline(to, attempt, last_result, timeout)
            except GCMError as e:
                error = e

            reason = None
            if attempt <= retries:
                if result is not None and is_retryable_error_code(result.error):
                    reason = "application"
                elif error is not None and is_retryable_transport_error(error):
                    reason = "http_5xx"

            if reason is None:
                if error is not None:
                    logger.warning(
                        "Single send failed",
                        to=to,
                        attempt=attempt,
                        error_type=type(error).__name__,
                        error=error.message,
                    )
                    gcm_requests_total.labels(operation=self.operation, outcome="terminal").inc()
                    raise error

                logger.info(
                    "Single send completed",
                    to=to,
                    attempt=attempt,
                    message_id=result.message_id,
                    error=result.error,
                )
                gcm_requests_total.labels(operation=self.operation, outcome="ok").inc()
                return result

            delay = backoff.next_delay()
            gcm_retries_total.labels(operation=self.operation, reason=reason).inc()
            logger.info(
                f"Retrying single send after {delay:.3f}s",
                to=to,
                attempt=attempt,
                retries=retries,
                reason=reason,
                error=result.error if result is not None else error.message,
            )
            try:
                await deadline.run(self._sleep, delay)
            except DeadlineExceededError:
                return self._on_deadline(to, attempt, last_result, timeout)

    def _on_deadline(
        self,
        to: str,
        attempt: int,
        last_result: Result | None,
        timeout: float | None,
    ) -> Result:
        logger.warning(
            "Single send deadline exceeded",
            to=to,
            attempt=attempt,
            timeout=timeout,
            has_result=last_result is not None,
        )
        gcm_requests_total.labels(operation=self.operation, outcome="deadline").inc()
        if last_result is None:
            raise DeadlineExceededError(timeout, details={"to": to, "attempt": attempt})
        return last_result
