"""
Retry engines for single-target and multicast sends.

Retry policy:
    1. Whole-call retry on HTTP 5xx
    2. Retry on Unavailable / InternalServerError reported in a 200 response
       (multicast: only the recipients that reported it)
    3. Jittered exponential backoff between attempts, capped
    4. Every other failure is final

Main Components:
    - SingleRetryEngine: retries a registration id, topic or device group send
    - MulticastRetryEngine: shrinks the recipient list across rounds
    - reconcile: folds per-round outcomes back into the caller's order
    - BackoffPolicy: jittered, capped exponential delays
    - Deadline: operation-wide time budget

Usage:
    >>> from gcm_sender.retry import MulticastRetryEngine
    >>> engine = MulticastRetryEngine(transport, settings)
    >>> result = await engine.execute(message, ["id1", "id2"], retries=3)
"""

from gcm_sender.retry.backoff import BackoffPolicy
from gcm_sender.retry.classifier import (
    RETRYABLE_ERROR_CODES,
    is_retryable_error_code,
    is_retryable_status,
    is_retryable_transport_error,
)
from gcm_sender.retry.deadline import Deadline
from gcm_sender.retry.exceptions import DeadlineExceededError
from gcm_sender.retry.multicast import MulticastRetryEngine
from gcm_sender.retry.reconciler import Reconciliation, reconcile
from gcm_sender.retry.single import SingleRetryEngine

__all__ = [
    "BackoffPolicy",
    "Deadline",
    "DeadlineExceededError",
    "MulticastRetryEngine",
    "SingleRetryEngine",
    "Reconciliation",
    "reconcile",
    "RETRYABLE_ERROR_CODES",
    "is_retryable_error_code",
    "is_retryable_status",
    "is_retryable_transport_error",
]
