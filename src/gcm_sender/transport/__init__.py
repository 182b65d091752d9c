"""
Transport abstraction and implementations.

Components:
- BaseTransport: Abstract base class for connection server transports
- HttpTransport: httpx implementation
- exceptions: Transport-specific exceptions
"""

from gcm_sender.transport.base_transport import BaseTransport
from gcm_sender.transport.exceptions import (
    ResponseDecodeError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from gcm_sender.transport.http_transport import HttpTransport

__all__ = [
    "BaseTransport",
    "HttpTransport",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "ResponseDecodeError",
]
