"""
GCM/FCM downstream message sender.

Delivers push messages to registration ids, topics and device groups over the
GCM HTTP connection server protocol:
- Single-target sends with whole-call retries
- Multicast sends that retry only the recipients the server asked to retry
- Reconciliation of several partial responses into one ordered result

Architecture: httpx transport + retry engines with jittered exponential backoff
"""

from gcm_sender.models.message import Message, Notification
from gcm_sender.models.enums import ErrorCode, Priority
from gcm_sender.models.results import MulticastResult, Result
from gcm_sender.sender import Sender

__version__ = "0.1.0"

__all__ = [
    "Sender",
    "Message",
    "Notification",
    "Priority",
    "ErrorCode",
    "Result",
    "MulticastResult",
]
