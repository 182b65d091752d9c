"""
Wire models for the connection server's HTTP response body.

These mirror the JSON exactly and are decoded once at the transport
boundary. Absent fields decode to zero/None so business code never has to
look at raw dicts.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipientResult(BaseModel):
    """
    Outcome for one recipient of a request, aligned by position with the
    registration ids that were sent.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    message_id: Optional[str] = Field(default=None, description="Set when the message was accepted")
    registration_id: Optional[str] = Field(
        default=None,
        description="Canonical registration id replacing the one that was sent",
    )
    error: Optional[str] = Field(default=None, description="Application error code")

    @property
    def delivered(self) -> bool:
        return bool(self.message_id)

    @property
    def canonical(self) -> bool:
        return self.delivered and bool(self.registration_id)


class DownstreamResponse(BaseModel):
    """Body of a 200 response to a downstream send."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    multicast_id: int = Field(default=0, description="Unique id of the multicast message")
    success: int = Field(default=0, description="Messages processed without an error")
    failure: int = Field(default=0, description="Messages that could not be processed")
    canonical_ids: int = Field(default=0, description="Results carrying a canonical registration id")
    results: Optional[list[RecipientResult]] = None
    # topic messages only
    message_id: int = 0
    error: Optional[str] = None
    # device group messages only
    failed_registration_ids: Optional[list[str]] = None
