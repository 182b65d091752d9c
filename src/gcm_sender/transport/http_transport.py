"""
HTTP transport for the GCM/FCM connection server.

Communicates with the connection server using httpx AsyncClient:
- POST <endpoint> with a JSON body and `Authorization: key=<api key>`
- Connection pooling via a persistent AsyncClient
- Non-200 statuses surfaced as TransportError with the status code

The endpoint is passed in at construction time, so tests point the
transport at a mock server without touching any shared state.
"""

import json
import time
from typing import Any, Optional

import httpx
import pydantic
import structlog

from gcm_sender.config import CONNECTION_SERVER_ENDPOINT
from gcm_sender.models.response import DownstreamResponse
from gcm_sender.monitoring.metrics import gcm_request_latency_seconds
from gcm_sender.transport.base_transport import BaseTransport
from gcm_sender.transport.exceptions import (
    ResponseDecodeError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)


logger = structlog.get_logger(__name__)


class HttpTransport(BaseTransport):
    """
    httpx-based transport.

    Features:
    - Persistent AsyncClient, created lazily and reused across requests
    - Optional caller-supplied AsyncClient (custom proxies, mock transports)
    - Latency histogram per request
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str = CONNECTION_SERVER_ENDPOINT,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        connection_limits: Optional[httpx.Limits] = None,
    ):
        """
        Initialize HTTP transport.

        Args:
            api_key: Server API key sent in the Authorization header
            endpoint: Connection server URL
            timeout: Request timeout in seconds
            client: Existing AsyncClient to use instead of creating one
            connection_limits: httpx pool limits for the owned client
        """
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )
        self._connection_limits = connection_limits
        self._client = client
        # Clients passed in by the caller are closed by the caller.
        self._owns_client = client is None

        logger.info(
            "HTTP transport initialized",
            endpoint=self.endpoint,
            timeout=timeout,
            external_client=not self._owns_client,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
            )
            self._owns_client = True
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"key={self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, payload: dict[str, Any]) -> DownstreamResponse:
        operation = "multicast" if "registration_ids" in payload else "single"
        start_time = time.monotonic()

        client = await self._get_client()
        try:
            response = await client.post(
                self.endpoint,
                content=json.dumps(payload),
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            logger.warning("Connection server request timeout", timeout=self.timeout, error=str(e))
            raise TransportTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout},
            ) from e
        except httpx.TransportError as e:
            logger.warning("Connection server network error", error=str(e), error_type=type(e).__name__)
            raise TransportConnectionError(
                f"Network error: {e}",
                details={"error_type": type(e).__name__},
            ) from e
        finally:
            gcm_request_latency_seconds.labels(operation=operation).observe(
                time.monotonic() - start_time
            )

        if response.status_code != httpx.codes.OK:
            status = f"{response.status_code} {response.reason_phrase}"
            logger.warning(
                "Connection server HTTP error",
                status_code=response.status_code,
                status=status,
            )
            raise TransportError(
                response.status_code,
                status,
                details={"body": response.text[:500]},
            )

        try:
            decoded = DownstreamResponse.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            logger.error("failed to unmarshal json", body=response.text[:500])
            raise ResponseDecodeError(
                "Invalid JSON response from connection server",
                details={"parse_error": str(e)},
            ) from e

        logger.debug(
            "Connection server response",
            multicast_id=decoded.multicast_id,
            success=decoded.success,
            failure=decoded.failure,
            canonical_ids=decoded.canonical_ids,
        )
        return decoded

    async def close(self):
        """Close the HTTP client connection if this transport created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed connection server client")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"endpoint={self.endpoint}, "
            f"timeout={self.timeout}s)"
        )
