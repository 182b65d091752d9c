"""
Unit tests for request preconditions.
"""

import pytest

from gcm_sender.exceptions import ValidationError
from gcm_sender.models.message import MAX_TIME_TO_LIVE, Message
from gcm_sender.validation import check_unrecoverable_errors


def test_valid_single_target_request(message):
    check_unrecoverable_errors("key", "regId", None, message, 0)


def test_valid_multicast_request(message):
    check_unrecoverable_errors("key", None, ["1", "2"], message, 3)


@pytest.mark.parametrize(
    "api_key, to, registration_ids, msg, retries, expected",
    [
        ("", "regId", None, Message(), 0, "missing API key"),
        ("key", "regId", None, None, 0, "message cannot be None"),
        ("key", "regId", None, Message(time_to_live=-1), 0,
         "TimeToLive should be non-negative and at most 4 weeks"),
        ("key", "regId", None, Message(time_to_live=MAX_TIME_TO_LIVE + 1), 0,
         "TimeToLive should be non-negative and at most 4 weeks"),
        ("key", None, None, Message(), 0, "missing recipient(s)"),
        ("key", "", [], Message(), 0, "missing recipient(s)"),
        ("key", "regId", None, Message(), -1, "retries cannot be negative"),
    ],
)
def test_invalid_requests(api_key, to, registration_ids, msg, retries, expected):
    with pytest.raises(ValidationError) as exc_info:
        check_unrecoverable_errors(api_key, to, registration_ids, msg, retries)

    assert exc_info.value.message == expected


def test_time_to_live_bounds_are_inclusive():
    check_unrecoverable_errors("key", "regId", None, Message(time_to_live=0), 0)
    check_unrecoverable_errors("key", "regId", None, Message(time_to_live=MAX_TIME_TO_LIVE), 0)


def test_checks_run_in_order():
    # Every check fails; the API key is reported first.
    with pytest.raises(ValidationError, match="missing API key"):
        check_unrecoverable_errors("", None, None, None, -1)

    with pytest.raises(ValidationError, match="missing recipient"):
        check_unrecoverable_errors("key", None, None, Message(), -1)
