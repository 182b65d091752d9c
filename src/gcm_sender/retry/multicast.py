"""
Multicast retry engine.

Sends one message to many registration ids and retries only the recipients
whose outcome was Unavailable or InternalServerError. Each round sends a new,
smaller list; the outcome reported for each registration id overwrites the
previous one in a single map, which is folded back into the caller's order
once the rounds are over.

Round termination:
    1. No recipient left to retry
    2. Retry budget exhausted
    3. Terminal transport failure: raised on the first round, otherwise the
       accumulated outcomes are returned and the failure is dropped
"""

import asyncio
import random
from collections.abc import Sequence
from typing import Awaitable, Callable, Optional

import structlog

from gcm_sender.config import Settings
from gcm_sender.exceptions import GCMError
from gcm_sender.models.message import Message
from gcm_sender.models.response import DownstreamResponse, RecipientResult
from gcm_sender.models.results import MulticastResult, Result
from gcm_sender.monitoring.metrics import (
    gcm_recipient_results_total,
    gcm_requests_total,
    gcm_retries_total,
)
from gcm_sender.retry.backoff import BackoffPolicy
from gcm_sender.retry.classifier import (
    is_retryable_error_code,
    is_retryable_transport_error,
)
from gcm_sender.retry.deadline import Deadline
from gcm_sender.retry.exceptions import DeadlineExceededError
from gcm_sender.retry.reconciler import reconcile
from gcm_sender.transport.base_transport import BaseTransport
from gcm_sender.transport.exceptions import ResponseDecodeError

logger = structlog.get_logger(__name__)


class MulticastRetryEngine:
    """
    Retry engine for multicast messages.

    The engine itself is stateless between calls: the recipient subset,
    backoff policy and outcome map all live inside execute(), so one engine
    may serve concurrent sends.

    Attributes:
        transport: Transport used for every round
        settings: Application settings (backoff bounds)
    """

    operation = "multicast"

    def __init__(
        self,
        transport: BaseTransport,
        settings: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.transport = transport
        self.settings = settings
        self._sleep = sleep
        self._rng = rng

    async def send_once(self, message: Message, registration_ids: Sequence[str]) -> MulticastResult:
        """
        Send one multicast request without retrying.

        The counters and results are the server's, unreconciled.
        """
        response = await self.transport.send(
            message.to_payload(registration_ids=list(registration_ids))
        )
        gcm_requests_total.labels(operation=self.operation, outcome="ok").inc()
        return MulticastResult(
            success=response.success,
            failure=response.failure,
            canonical_ids=response.canonical_ids,
            multicast_id=response.multicast_id,
            results=[Result.from_recipient_result(r) for r in response.results or []],
        )

    async def _send_round(self, message: Message, pending: list[str]) -> DownstreamResponse:
        response = await self.transport.send(message.to_payload(registration_ids=pending))
        sent = len(pending)
        received = len(response.results) if response.results is not None else 0
        if received != sent:
            raise ResponseDecodeError(
                f"expected {sent} results, got {received}",
                details={"multicast_id": response.multicast_id},
            )
        return response

    async def execute(
        self,
        message: Message,
        registration_ids: Sequence[str],
        retries: int,
        timeout: float | None = None,
    ) -> MulticastResult:
        """
        Send to every registration id, retrying transient failures.

        Args:
            message: Message to deliver
            registration_ids: Recipients, order and duplicates preserved
            retries: Number of retry rounds after the first
            timeout: Optional deadline for the whole operation, in seconds

        Returns:
            MulticastResult aligned with registration_ids

        Raises:
            TransportError: Terminal status on the first round
            ResponseDecodeError: Unreadable response on the first round
            DeadlineExceededError: Deadline expired before any round got a 200 response
        """
        original_ids = list(registration_ids)
        outcomes: dict[str, RecipientResult] = {}
        multicast_id = 0
        retry_multicast_ids: list[int] = []

        backoff = BackoffPolicy.from_settings(self.settings, rng=self._rng)
        deadline = Deadline(timeout)
        pending = original_ids
        first_response = True
        # Deadline expiry raises until some round has produced a response
        responded = False
        outcome = "ok"
        round_number = 0

        logger.info(
            "Starting multicast send",
            recipients=len(original_ids),
            retries=retries,
            timeout=timeout,
        )

        while True:
            round_number += 1
            response: DownstreamResponse | None = None

            try:
                response = await deadline.run(self._send_round, message, pending)
            except DeadlineExceededError:
                if not responded:
                    gcm_requests_total.labels(operation=self.operation, outcome="deadline").inc()
                    raise
                logger.warning("Multicast deadline exceeded", round=round_number, timeout=timeout)
                outcome = "deadline"
                break
            except GCMError as e:
                if is_retryable_transport_error(e):
                    logger.warning(
                        "Multicast round failed with server error",
                        round=round_number,
                        status_code=e.status_code,
                        pending=len(pending),
                    )
                elif first_response:
                    logger.warning(
                        "Multicast send failed",
                        round=round_number,
                        error_type=type(e).__name__,
                        error=e.message,
                    )
                    gcm_requests_total.labels(operation=self.operation, outcome="terminal").inc()
                    raise
                else:
                    # Earlier rounds already produced results; return those.
                    logger.warning(
                        "Multicast retry round failed, returning partial results",
                        round=round_number,
                        error_type=type(e).__name__,
                        error=e.message,
                    )
                    outcome = "partial"
                    break

            if response is not None:
                responded = True
                if response.multicast_id:
                    if first_response:
                        multicast_id = response.multicast_id
                    else:
                        retry_multicast_ids.append(response.multicast_id)
                retry_ids = self._record_round(pending, response, outcomes)
                reason = "application"
            else:
                retry_ids = list(pending)
                reason = "http_5xx"

            logger.info(
                "Multicast round completed",
                round=round_number,
                sent=len(pending),
                multicast_id=response.multicast_id if response is not None else None,
                to_retry=len(retry_ids),
            )

            first_response = False
            if retries <= 0 or not retry_ids:
                break

            pending = retry_ids
            delay = backoff.next_delay()
            gcm_retries_total.labels(operation=self.operation, reason=reason).inc()
            logger.info(
                f"Retrying {len(pending)} recipient(s) after {delay:.3f}s",
                round=round_number,
                retries_left=retries,
                reason=reason,
            )
            try:
                await deadline.run(self._sleep, delay)
            except DeadlineExceededError:
                if not responded:
                    gcm_requests_total.labels(operation=self.operation, outcome="deadline").inc()
                    raise
                logger.warning("Multicast deadline exceeded during backoff", round=round_number, timeout=timeout)
                outcome = "deadline"
                break
            retries -= 1

        reconciliation = reconcile(outcomes, original_ids)
        result = MulticastResult(
            success=reconciliation.success,
            failure=reconciliation.failure,
            canonical_ids=reconciliation.canonical_ids,
            multicast_id=multicast_id,
            results=reconciliation.results,
            retry_multicast_ids=retry_multicast_ids,
        )

        canonical = reconciliation.canonical_ids
        gcm_recipient_results_total.labels(outcome="delivered").inc(reconciliation.success - canonical)
        gcm_recipient_results_total.labels(outcome="canonical").inc(canonical)
        gcm_recipient_results_total.labels(outcome="failed").inc(reconciliation.failure)
        gcm_requests_total.labels(operation=self.operation, outcome=outcome).inc()

        logger.info(
            "Multicast send completed",
            rounds=round_number,
            multicast_id=multicast_id,
            retry_multicast_ids=retry_multicast_ids,
            success=result.success,
            failure=result.failure,
            canonical_ids=result.canonical_ids,
        )
        return result

    @staticmethod
    def _record_round(
        pending: list[str],
        response: DownstreamResponse,
        outcomes: dict[str, RecipientResult],
    ) -> list[str]:
        """Store each positional outcome by registration id; return ids to retry."""
        retry_ids: list[str] = []
        for registration_id, recipient_result in zip(pending, response.results or []):
            outcomes[registration_id] = recipient_result
            if is_retryable_error_code(recipient_result.error):
                retry_ids.append(registration_id)
        return retry_ids
