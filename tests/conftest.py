"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from gcm_sender.config import Settings
from gcm_sender.models.message import Message
from gcm_sender.models.response import DownstreamResponse


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_BACKOFF_DELAY_MS = 4000
    """
    return Settings(
        APP_NAME="GCM Sender (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        GCM_API_KEY="test-api-key",
        GCM_ENDPOINT="http://gcm.test/send",
        HTTP_TIMEOUT=5.0,
        BACKOFF_INITIAL_DELAY_MS=1000,
        MAX_BACKOFF_DELAY_MS=1024000,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_response_data(fixtures_dir: Path):
    """Factory fixture loading a response body fixture as dict.

    Usage:
        def test_something(load_response_data):
            body = load_response_data("partial_multicast")
    """
    def _load(name: str) -> Dict[str, Any]:
        with open(fixtures_dir / f"{name}.json") as f:
            return json.load(f)

    return _load


@pytest.fixture
def load_response(load_response_data):
    """Factory fixture loading a response body fixture as DownstreamResponse."""
    def _load(name: str) -> DownstreamResponse:
        return DownstreamResponse(**load_response_data(name))

    return _load


@pytest.fixture
def message() -> Message:
    """Minimal data message."""
    return Message(data={"k": "v"})
