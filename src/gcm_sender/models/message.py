"""
Downstream message models.

Message is what callers build; to_payload() turns it into the JSON body of
one HTTP request by adding the target (`to` or `registration_ids`). Unset
options are omitted from the body, matching the connection server's
expectation that absent fields take their defaults.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from gcm_sender.models.enums import Priority


# Largest accepted time_to_live: 4 weeks, in seconds.
MAX_TIME_TO_LIVE = 2419200


class Notification(BaseModel):
    """Notification payload shown by the client app."""
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(default=None, description="Required for Android")
    body: Optional[str] = None
    sound: Optional[str] = None
    click_action: Optional[str] = None
    body_loc_key: Optional[str] = None
    body_loc_args: Optional[list[str]] = None
    title_loc_key: Optional[str] = None
    title_loc_args: Optional[list[str]] = None
    # Android only
    icon: Optional[str] = None
    tag: Optional[str] = None
    color: Optional[str] = None
    # iOS only
    badge: Optional[str] = None


class Message(BaseModel):
    """
    Downstream message: delivery options plus payload.

    Frozen so that a message cannot change between retry rounds.
    """
    model_config = ConfigDict(frozen=True)

    # Options
    collapse_key: Optional[str] = Field(default=None, description="Groups messages that replace each other")
    delay_while_idle: bool = False
    time_to_live: int = Field(default=0, description="Seconds the message is kept while the device is offline")
    restricted_package_name: Optional[str] = None
    dry_run: bool = Field(default=False, description="Test the request without delivering it")
    content_available: bool = False
    priority: Optional[Priority] = None
    # Payload
    data: Optional[dict[str, str]] = None
    notification: Optional[Notification] = None

    def to_payload(
        self,
        to: str | None = None,
        registration_ids: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Build the JSON request body for a single target or a recipient list.

        Args:
            to: Registration id, topic or notification key
            registration_ids: Recipients of a multicast request

        Returns:
            Dict ready to be sent as the request JSON
        """
        payload = self.model_dump(mode="json", exclude_defaults=True)
        if to:
            payload["to"] = to
        if registration_ids:
            payload["registration_ids"] = list(registration_ids)
        return payload
