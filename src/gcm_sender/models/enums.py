"""
Enumerations for the GCM sender data models.

All enums are closed taxonomies defined by the connection server protocol.
"""

from enum import Enum


class Priority(str, Enum):
    """
    Delivery priority of a downstream message.

    On iOS, "normal" corresponds to APNs priority 5 and "high" to 10.
    """

    NORMAL = "normal"
    HIGH = "high"


class ErrorCode(str, Enum):
    """
    Application-level error codes reported in a 200 response.

    Only UNAVAILABLE and INTERNAL_SERVER_ERROR signal a transient server
    condition; every other code is final for the recipient it refers to.
    """

    MISSING_REGISTRATION = "MissingRegistration"
    INVALID_REGISTRATION = "InvalidRegistration"
    NOT_REGISTERED = "NotRegistered"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    MESSAGE_TOO_BIG = "MessageTooBig"
    INVALID_DATA_KEY = "InvalidDataKey"
    INVALID_TTL = "InvalidTtl"
    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    DEVICE_MESSAGE_RATE_EXCEEDED = "DeviceMessageRateExceeded"
    TOPICS_MESSAGE_RATE_EXCEEDED = "TopicsMessageRateExceeded"


class TargetKind(str, Enum):
    """Kind of addressee a single-target send was sent to."""

    REGISTRATION_ID = "registration_id"
    TOPIC = "topic"
    DEVICE_GROUP = "device_group"
