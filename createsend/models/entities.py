"""
Pydantic models for the list resource.

Response models keep every field the service returns: documented fields are
typed attributes, anything else is retained as an extra field.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from .types import ListId, SegmentId, WebhookId

_WHITESPACE = re.compile(r"\s")


def normalize_custom_field_key(key: str) -> str:
    """Replace each whitespace character with `_` and lowercase the result."""
    return _WHITESPACE.sub("_", key).lower()


def normalize_custom_fields(fields: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """
    Turn the service's `[{"Key": ..., "Value": ...}]` sequence into a mapping
    keyed by `normalize_custom_field_key(Key)`.

    Later entries overwrite earlier ones that normalize to the same key. Raises
    `ValueError` for an entry that is not a mapping with a string `Key`.
    """
    result: dict[str, Any] = {}
    for index, item in enumerate(fields):
        if not isinstance(item, Mapping):
            raise ValueError(f"custom field {index} must be an object with a Key")
        key = item.get("Key")
        if not isinstance(key, str):
            raise ValueError(f"custom field {index} has no string Key")
        result[normalize_custom_field_key(key)] = item.get("Value")
    return result


class CreateSendModel(BaseModel):
    """Base model: PascalCase wire names, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="allow",
        validate_assignment=True,
    )


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="forbid",
    )


# =============================================================================
# List
# =============================================================================


class ListSettings(_RequestModel):
    """Settings sent when creating or updating a list."""

    title: str
    unsubscribe_page: str = ""
    confirmed_opt_in: bool = False
    confirmation_success_page: str = ""


class ListDetails(CreateSendModel):
    list_id: ListId = Field(alias="ListID")
    title: str
    unsubscribe_page: str | None = None
    confirmed_opt_in: bool | None = None
    confirmation_success_page: str | None = None
    unsubscribe_setting: str | None = None


class ListStats(CreateSendModel):
    total_active_subscribers: int = 0
    new_active_subscribers_today: int = 0
    new_active_subscribers_yesterday: int = 0
    new_active_subscribers_this_week: int = 0
    new_active_subscribers_this_month: int = 0
    new_active_subscribers_this_year: int = 0
    total_unsubscribes: int = 0
    unsubscribes_today: int = 0
    unsubscribes_yesterday: int = 0
    unsubscribes_this_week: int = 0
    unsubscribes_this_month: int = 0
    unsubscribes_this_year: int = 0
    total_deleted: int = 0
    deleted_today: int = 0
    deleted_yesterday: int = 0
    deleted_this_week: int = 0
    deleted_this_month: int = 0
    deleted_this_year: int = 0
    total_bounces: int = 0
    bounces_today: int = 0
    bounces_yesterday: int = 0
    bounces_this_week: int = 0
    bounces_this_month: int = 0
    bounces_this_year: int = 0


# =============================================================================
# Custom fields
# =============================================================================


class CustomFieldDefinition(CreateSendModel):
    field_name: str
    key: str
    data_type: str
    field_options: list[str] = Field(default_factory=list)
    visible_in_preference_center: bool | None = None


class CustomFieldValue(CreateSendModel):
    """A single `{Key, Value}` pair as delivered by the service."""

    key: str
    value: Any = None


# =============================================================================
# Segments
# =============================================================================


class Segment(CreateSendModel):
    list_id: ListId = Field(alias="ListID")
    segment_id: SegmentId = Field(alias="SegmentID")
    title: str


# =============================================================================
# Subscribers
# =============================================================================


class _SubscriberBase(CreateSendModel):
    email_address: str
    name: str | None = None
    date: str | None = None
    state: str | None = None


class Subscriber(_SubscriberBase):
    """Subscriber record with custom fields in the service's raw shape."""

    custom_fields: list[CustomFieldValue] = Field(default_factory=list)


class ActiveSubscriber(_SubscriberBase):
    """
    Subscriber record from the active listing.

    Custom fields are a mapping from normalized key (whitespace replaced by `_`,
    lowercased) to value.
    """

    custom_fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("custom_fields", mode="before")
    @classmethod
    def _normalize_custom_fields(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, list):
            return normalize_custom_fields(value)
        return value


# =============================================================================
# Webhooks
# =============================================================================


class Webhook(CreateSendModel):
    webhook_id: WebhookId = Field(alias="WebhookID")
    events: list[str] = Field(default_factory=list)
    url: str
    status: str | None = None
    payload_format: str | None = None

    @property
    def is_active(self) -> bool:
        return (self.status or "").lower() == "active"
