"""
Target-specific decoding of single-target responses.

The connection server answers a registration id, a topic and a device group
with structurally different bodies. decode_delivery() turns the wire body
into one variant of the Delivery tagged union, and to_result() flattens any
variant into the public Result.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gcm_sender.models.enums import TargetKind
from gcm_sender.models.response import DownstreamResponse
from gcm_sender.models.results import Result
from gcm_sender.transport.exceptions import ResponseDecodeError


TOPIC_PREFIX = "/topics/"


class SingleDelivery(BaseModel):
    """Outcome of a message sent to one registration id."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TargetKind.REGISTRATION_ID] = TargetKind.REGISTRATION_ID
    message_id: Optional[str] = None
    canonical_registration_id: Optional[str] = None
    error: Optional[str] = None


class TopicDelivery(BaseModel):
    """Outcome of a topic message: either a message id or an error."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TargetKind.TOPIC] = TargetKind.TOPIC
    message_id: Optional[str] = None
    error: Optional[str] = None


class GroupDelivery(BaseModel):
    """Outcome of a device group message, possibly a partial success."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TargetKind.DEVICE_GROUP] = TargetKind.DEVICE_GROUP
    success: int = 0
    failure: int = 0
    failed_registration_ids: Optional[list[str]] = None


Delivery = Annotated[
    Union[SingleDelivery, TopicDelivery, GroupDelivery],
    Field(discriminator="kind"),
]


def target_kind(to: str) -> TargetKind:
    """Registration ids and notification keys are told apart by the response."""
    if to.startswith(TOPIC_PREFIX):
        return TargetKind.TOPIC
    return TargetKind.DEVICE_GROUP


def decode_delivery(to: str, response: DownstreamResponse) -> Delivery:
    """
    Decode a single-target response into its Delivery variant.

    A response carrying `results` is a registration id delivery; otherwise
    the target name decides between topic and device group.

    Raises:
        ResponseDecodeError: If the body does not match the expected shape
    """
    if response.results is not None:
        if len(response.results) != 1:
            raise ResponseDecodeError(
                f"invalid response.results: {response.results}",
                details={"to": to, "results_count": len(response.results)},
            )
        result = response.results[0]
        return SingleDelivery(
            message_id=result.message_id,
            canonical_registration_id=result.registration_id,
            error=result.error,
        )

    if target_kind(to) is TargetKind.TOPIC:
        if response.message_id:
            return TopicDelivery(message_id=str(response.message_id))
        if response.error:
            return TopicDelivery(error=response.error)
        raise ResponseDecodeError(
            f"expected message_id or error, but found: {response.model_dump(exclude_defaults=True)}",
            details={"to": to},
        )

    return GroupDelivery(
        success=response.success,
        failure=response.failure,
        failed_registration_ids=response.failed_registration_ids,
    )


def to_result(delivery: Delivery) -> Result:
    """Flatten a Delivery variant into the public Result."""
    if isinstance(delivery, SingleDelivery):
        return Result(
            message_id=delivery.message_id,
            canonical_registration_id=delivery.canonical_registration_id,
            error=delivery.error,
        )
    if isinstance(delivery, TopicDelivery):
        return Result(message_id=delivery.message_id, error=delivery.error)
    return Result(
        success=delivery.success,
        failure=delivery.failure,
        failed_registration_ids=delivery.failed_registration_ids,
    )
