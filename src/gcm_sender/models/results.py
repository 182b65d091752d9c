"""
Public result models returned by the sender.

Result describes one processed message (single target, topic or device
group, or one position of a multicast). MulticastResult is the aggregated
view of a multicast send across all of its retry rounds.
"""

from typing import Optional

from pydantic import BaseModel, Field

from gcm_sender.exceptions import ApplicationError
from gcm_sender.models.response import RecipientResult


class Result(BaseModel):
    """
    Status of a processed message.

    success, failure and failed_registration_ids are only set for device
    group messages, where a partial success is still a final outcome.
    """

    message_id: Optional[str] = None
    canonical_registration_id: Optional[str] = None
    error: Optional[str] = None
    # device group message only
    success: int = 0
    failure: int = 0
    failed_registration_ids: Optional[list[str]] = None

    @classmethod
    def from_recipient_result(cls, result: RecipientResult) -> "Result":
        return cls(
            message_id=result.message_id,
            canonical_registration_id=result.registration_id,
            error=result.error,
        )

    def raise_for_error(self) -> None:
        """Raise ApplicationError if the server reported an error code."""
        if self.error:
            raise ApplicationError(self.error, details={"message_id": self.message_id})


class MulticastResult(BaseModel):
    """
    Aggregated response of a multicast message.

    results is aligned index-for-index with the registration ids the caller
    passed in, whatever retry round each outcome came from.
    """

    success: int = 0
    failure: int = 0
    canonical_ids: int = 0
    multicast_id: int = 0
    results: list[Result] = Field(default_factory=list)
    retry_multicast_ids: list[int] = Field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise ApplicationError for the first position that failed."""
        for index, result in enumerate(self.results):
            if not result.message_id:
                raise ApplicationError(
                    result.error or "unknown",
                    details={"index": index, "multicast_id": self.multicast_id},
                )
