"""
Unit tests for BackoffPolicy.
"""

import random
from unittest.mock import MagicMock

import pytest

from gcm_sender.retry.backoff import BackoffPolicy


def test_defaults_match_connection_server_guidance():
    policy = BackoffPolicy()

    assert policy.backoff_ms == 1000
    assert policy.max_delay_ms == 1024000


def test_from_settings(test_settings):
    test_settings.BACKOFF_INITIAL_DELAY_MS = 250
    test_settings.MAX_BACKOFF_DELAY_MS = 4000

    policy = BackoffPolicy.from_settings(test_settings)

    assert policy.backoff_ms == 250
    assert policy.max_delay_ms == 4000


def test_delay_is_half_backoff_plus_jitter():
    rng = MagicMock(spec=random.Random)
    rng.randrange.return_value = 300
    policy = BackoffPolicy(initial_delay_ms=1000, max_delay_ms=1024000, rng=rng)

    assert policy.next_delay_ms() == 500 + 300
    rng.randrange.assert_called_once_with(1000)


def test_backoff_doubles_after_each_delay():
    rng = MagicMock(spec=random.Random)
    rng.randrange.return_value = 0
    policy = BackoffPolicy(initial_delay_ms=1000, max_delay_ms=1024000, rng=rng)

    delays = [policy.next_delay_ms() for _ in range(4)]

    assert delays == [500, 1000, 2000, 4000]
    assert policy.backoff_ms == 16000


def test_backoff_is_capped():
    rng = MagicMock(spec=random.Random)
    rng.randrange.return_value = 0
    policy = BackoffPolicy(initial_delay_ms=1000, max_delay_ms=3000, rng=rng)

    delays = [policy.next_delay_ms() for _ in range(4)]

    assert delays == [500, 1000, 1500, 1500]
    assert policy.backoff_ms == 3000


def test_delays_stay_within_jitter_window():
    policy = BackoffPolicy(initial_delay_ms=1000, max_delay_ms=8000, rng=random.Random(7))

    for _ in range(10):
        base = policy.backoff_ms
        delay = policy.next_delay_ms()
        assert base // 2 <= delay < base // 2 + base


def test_next_delay_is_in_seconds():
    rng = MagicMock(spec=random.Random)
    rng.randrange.return_value = 250
    policy = BackoffPolicy(rng=rng)

    assert policy.next_delay() == pytest.approx(0.75)


def test_policies_do_not_share_state():
    first = BackoffPolicy(rng=random.Random(1))
    first.next_delay_ms()
    first.next_delay_ms()

    second = BackoffPolicy(rng=random.Random(1))

    assert second.backoff_ms == 1000


@pytest.mark.parametrize(
    "initial, maximum",
    [(0, 1000), (-1, 1000), (2000, 1000)],
)
def test_invalid_bounds_are_rejected(initial, maximum):
    with pytest.raises(ValueError):
        BackoffPolicy(initial_delay_ms=initial, max_delay_ms=maximum)
