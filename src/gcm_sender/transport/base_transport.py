"""
Abstract base transport for the connection server.

Defines the interface that the retry engines send through. This abstraction
allows swapping the HTTP implementation (or a test double) without changing
retry or reconciliation logic.
"""

from abc import ABC, abstractmethod
from typing import Any

import structlog

from gcm_sender.models.response import DownstreamResponse


logger = structlog.get_logger(__name__)


class BaseTransport(ABC):
    """
    Abstract base class for connection server transports.

    Responsibilities:
    - Serialize and send one request body
    - Authenticate the request
    - Decode a 200 body into DownstreamResponse
    - Turn every other outcome into a TransportError subclass

    Does NOT handle:
    - Message construction (that's Message.to_payload's job)
    - Retries of any kind (that's the retry engines' job)
    """

    @abstractmethod
    async def send(self, payload: dict[str, Any]) -> DownstreamResponse:
        """
        Send one downstream request.

        Args:
            payload: Request JSON as built by Message.to_payload()

        Returns:
            Decoded response body

        Raises:
            TransportError: Non-200 status (status_code set)
            TransportConnectionError: No response received
            ResponseDecodeError: 200 with an unreadable body
        """
        pass

    async def close(self):
        """
        Close connections and cleanup resources.

        Default implementation does nothing. Subclasses holding persistent
        connections should override.
        """
        logger.debug("Closing transport", transport_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
