"""
Preconditions checked before any request is sent.
"""

from collections.abc import Sequence

from gcm_sender.exceptions import ValidationError
from gcm_sender.models.message import MAX_TIME_TO_LIVE, Message


def check_unrecoverable_errors(
    api_key: str,
    to: str | None,
    registration_ids: Sequence[str] | None,
    message: Message | None,
    retries: int,
) -> None:
    """
    Reject requests that can never succeed.

    Raises:
        ValidationError: On the first failed check, in this order: API key,
            message, time_to_live, recipient(s), retries
    """
    if not api_key:
        raise ValidationError("missing API key")
    if message is None:
        raise ValidationError("message cannot be None")
    if message.time_to_live < 0 or message.time_to_live > MAX_TIME_TO_LIVE:
        raise ValidationError(
            "TimeToLive should be non-negative and at most 4 weeks",
            details={"time_to_live": message.time_to_live},
        )
    if not to and not registration_ids:
        raise ValidationError("missing recipient(s)")
    if retries < 0:
        raise ValidationError("retries cannot be negative", details={"retries": retries})
