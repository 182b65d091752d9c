"""
Data models for the GCM sender.

- enums: Priority, ErrorCode, TargetKind
- message: Message and Notification (request side)
- response: DownstreamResponse and RecipientResult (wire side)
- results: Result and MulticastResult (public outcome)
- delivery: target-specific decoding of single-target responses
"""

from gcm_sender.models.delivery import (
    Delivery,
    GroupDelivery,
    SingleDelivery,
    TopicDelivery,
    TOPIC_PREFIX,
    decode_delivery,
    to_result,
)
from gcm_sender.models.enums import ErrorCode, Priority, TargetKind
from gcm_sender.models.message import MAX_TIME_TO_LIVE, Message, Notification
from gcm_sender.models.response import DownstreamResponse, RecipientResult
from gcm_sender.models.results import MulticastResult, Result

__all__ = [
    "ErrorCode",
    "Priority",
    "TargetKind",
    "Message",
    "Notification",
    "MAX_TIME_TO_LIVE",
    "DownstreamResponse",
    "RecipientResult",
    "Result",
    "MulticastResult",
    "Delivery",
    "SingleDelivery",
    "TopicDelivery",
    "GroupDelivery",
    "TOPIC_PREFIX",
    "decode_delivery",
    "to_result",
]
