"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without a connection server.
"""

import random
from unittest.mock import AsyncMock

import pytest

from gcm_sender.transport.base_transport import BaseTransport


@pytest.fixture
def mock_transport():
    """Mock transport; set send.side_effect to the per-call responses/errors."""
    mock = AsyncMock(spec=BaseTransport)
    mock.send = AsyncMock()
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_sleep():
    """Awaitable sleep that returns immediately and records delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic jitter source."""
    return random.Random(42)


@pytest.fixture
def sent_registration_ids(mock_transport):
    """Registration ids of every request the mock transport received, per call."""
    def _sent() -> list[list[str] | None]:
        return [
            call.args[0].get("registration_ids")
            for call in mock_transport.send.await_args_list
        ]

    return _sent
