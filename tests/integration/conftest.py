"""Integration test fixtures (in-process connection server).

The Sender is wired end-to-end through its real HttpTransport; only the
network is replaced, by an httpx.MockTransport serving scripted replies.
"""

import json
from typing import Any, Optional
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from gcm_sender.sender import Sender


class FakeConnectionServer:
    """
    Scripted connection server.

    Each request consumes the next queued reply. Replies are either a
    status code (empty body) or a (status, body) pair.
    """

    def __init__(self):
        self.replies: list[Any] = []
        self.requests: list[httpx.Request] = []

    def reply(self, *replies: Any) -> "FakeConnectionServer":
        self.replies.extend(replies)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"unexpected request #{len(self.requests)}")
        reply = self.replies.pop(0)
        if isinstance(reply, int):
            return httpx.Response(reply)
        status_code, body = reply
        return httpx.Response(status_code, json=body)

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def sent_registration_ids(self) -> list[Optional[list[str]]]:
        return [body.get("registration_ids") for body in self.bodies()]


@pytest.fixture
def server() -> FakeConnectionServer:
    return FakeConnectionServer()


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock(return_value=None)


@pytest_asyncio.fixture
async def sender(server, sleep, test_settings):
    """Sender talking to the fake server; backoff sleeps return immediately."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(server))
    sender = Sender.from_settings(test_settings, http_client=client, sleep=sleep)
    yield sender
    await sender.close()
    await client.aclose()
