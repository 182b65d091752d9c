"""
Unit tests for response decoding and target-specific delivery variants.
"""

import pytest

from gcm_sender.exceptions import ApplicationError
from gcm_sender.models.delivery import (
    GroupDelivery,
    SingleDelivery,
    TopicDelivery,
    decode_delivery,
    to_result,
)
from gcm_sender.models.enums import TargetKind
from gcm_sender.models.response import DownstreamResponse, RecipientResult
from gcm_sender.models.results import MulticastResult, Result
from gcm_sender.transport.exceptions import ResponseDecodeError


def test_response_fields_default_to_zero(load_response_data):
    response = DownstreamResponse(**load_response_data("partial_device_group"))

    assert response.multicast_id == 0
    assert response.canonical_ids == 0
    assert response.results is None
    assert response.failed_registration_ids == ["id1", "id2"]


def test_recipient_result_flags():
    assert RecipientResult(message_id="m").delivered is True
    assert RecipientResult(message_id="m").canonical is False
    assert RecipientResult(message_id="m", registration_id="new").canonical is True
    assert RecipientResult(error="Unavailable").delivered is False


def test_registration_id_delivery(load_response):
    delivery = decode_delivery("regId", load_response("success"))

    assert delivery == SingleDelivery(message_id="id")
    assert delivery.kind is TargetKind.REGISTRATION_ID
    assert to_result(delivery) == Result(message_id="id")


def test_registration_id_with_canonical_id():
    response = DownstreamResponse(
        success=1,
        canonical_ids=1,
        results=[RecipientResult(message_id="id", registration_id="new")],
    )

    result = to_result(decode_delivery("regId", response))

    assert result == Result(message_id="id", canonical_registration_id="new")


def test_registration_id_requires_exactly_one_result():
    with pytest.raises(ResponseDecodeError, match="invalid response.results"):
        decode_delivery("regId", DownstreamResponse(results=[]))


def test_topic_delivery_with_message_id():
    delivery = decode_delivery("/topics/global", DownstreamResponse(message_id=108))

    assert delivery == TopicDelivery(message_id="108")
    assert to_result(delivery) == Result(message_id="108")


def test_topic_delivery_with_error():
    delivery = decode_delivery("/topics/global", DownstreamResponse(error="TopicsMessageRateExceeded"))

    assert to_result(delivery) == Result(error="TopicsMessageRateExceeded")


def test_topic_delivery_requires_message_id_or_error():
    with pytest.raises(ResponseDecodeError, match="expected message_id or error"):
        decode_delivery("/topics/global", DownstreamResponse())


def test_device_group_partial_success(load_response):
    delivery = decode_delivery("group-key", load_response("partial_device_group"))

    assert delivery == GroupDelivery(success=1, failure=2, failed_registration_ids=["id1", "id2"])
    assert to_result(delivery) == Result(success=1, failure=2, failed_registration_ids=["id1", "id2"])


def test_raise_for_error():
    Result(message_id="id").raise_for_error()

    with pytest.raises(ApplicationError) as exc_info:
        Result(error="NotRegistered").raise_for_error()

    assert exc_info.value.code == "NotRegistered"


def test_raise_for_errors_reports_first_failed_position():
    result = MulticastResult(
        success=1,
        failure=2,
        results=[Result(message_id="a"), Result(), Result(error="NotRegistered")],
    )

    with pytest.raises(ApplicationError) as exc_info:
        result.raise_for_errors()

    assert exc_info.value.code == "unknown"
    assert exc_info.value.details["index"] == 1
