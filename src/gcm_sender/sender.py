"""
Sender: public entry point for downstream messages.

Validates every request, then hands it to the single-target or multicast
retry engine. All four operations share one transport and may be awaited
concurrently.

Usage:
    async with Sender("api-key") as sender:
        result = await sender.send_multicast_with_retries(message, ids, retries=3)
"""

import asyncio
import random
from collections.abc import Sequence
from typing import Awaitable, Callable, Optional

import httpx
import structlog

from gcm_sender.config import Settings
from gcm_sender.config import settings as default_settings
from gcm_sender.models.message import Message
from gcm_sender.models.results import MulticastResult, Result
from gcm_sender.retry.multicast import MulticastRetryEngine
from gcm_sender.retry.single import SingleRetryEngine
from gcm_sender.transport.base_transport import BaseTransport
from gcm_sender.transport.http_transport import HttpTransport
from gcm_sender.validation import check_unrecoverable_errors

logger = structlog.get_logger(__name__)


class Sender:
    """
    Sends messages to the GCM/FCM connection server.

    Attributes:
        api_key: Server API key
        transport: Transport shared by both engines
        settings: Application settings
    """

    def __init__(
        self,
        api_key: str,
        settings: Optional[Settings] = None,
        transport: Optional[BaseTransport] = None,
        endpoint: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize sender.

        Args:
            api_key: Server API key
            settings: Application settings (defaults to environment)
            transport: Transport to use instead of an HttpTransport
            endpoint: Connection server URL, overrides settings.GCM_ENDPOINT
            http_client: AsyncClient for the default HttpTransport
            sleep: Awaitable sleep used between retries
            rng: Random source for backoff jitter
        """
        self.api_key = api_key
        self.settings = settings or default_settings

        if transport is None:
            transport = HttpTransport(
                api_key=api_key,
                endpoint=endpoint or self.settings.GCM_ENDPOINT,
                timeout=self.settings.HTTP_TIMEOUT,
                client=http_client,
                connection_limits=httpx.Limits(
                    max_keepalive_connections=self.settings.HTTP_MAX_KEEPALIVE_CONNECTIONS,
                    max_connections=self.settings.HTTP_MAX_CONNECTIONS,
                    keepalive_expiry=30.0,
                ),
            )
        self.transport = transport

        self.single_engine = SingleRetryEngine(transport, self.settings, sleep=sleep, rng=rng)
        self.multicast_engine = MulticastRetryEngine(transport, self.settings, sleep=sleep, rng=rng)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "Sender":
        """Build a sender from GCM_API_KEY / GCM_ENDPOINT settings."""
        return cls(settings.GCM_API_KEY, settings=settings, **kwargs)

    async def send_no_retry(self, message: Message, to: str) -> Result:
        """
        Send to a single registration id, topic or device group, once.

        Raises:
            ValidationError: Invalid request
            TransportError: Non-200 status or network failure
            ResponseDecodeError: Unreadable response
        """
        check_unrecoverable_errors(self.api_key, to, None, message, 0)
        return await self.single_engine.send_once(message, to)

    async def send_with_retries(
        self,
        message: Message,
        to: str,
        retries: int,
        timeout: float | None = None,
    ) -> Result:
        """
        Send to a single target, retrying transient failures.

        See SingleRetryEngine.execute for the retry contract.
        """
        check_unrecoverable_errors(self.api_key, to, None, message, retries)
        return await self.single_engine.execute(message, to, retries, timeout=timeout)

    async def send_multicast_no_retry(
        self,
        message: Message,
        registration_ids: Sequence[str],
    ) -> MulticastResult:
        """
        Send to several registration ids, once.

        Raises:
            ValidationError: Invalid request
            TransportError: Non-200 status or network failure
            ResponseDecodeError: Unreadable response
        """
        check_unrecoverable_errors(self.api_key, None, registration_ids, message, 0)
        return await self.multicast_engine.send_once(message, registration_ids)

    async def send_multicast_with_retries(
        self,
        message: Message,
        registration_ids: Sequence[str],
        retries: int,
        timeout: float | None = None,
    ) -> MulticastResult:
        """
        Send to several registration ids, retrying only transient failures.

        See MulticastRetryEngine.execute for the retry contract.
        """
        check_unrecoverable_errors(self.api_key, None, registration_ids, message, retries)
        return await self.multicast_engine.execute(
            message, registration_ids, retries, timeout=timeout
        )

    async def close(self):
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(transport={self.transport!r})"
