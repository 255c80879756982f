"""
Identifier types, enums and constants for the Campaign Monitor list API.

Enums are offered for convenience only. Every operation also accepts plain
strings and forwards them unchanged; the service performs validation.
"""

from __future__ import annotations

from enum import Enum
from typing import NewType, TypeAlias

BASE_URL = "https://api.createsend.com/api/v3/"

# =============================================================================
# ID types
# =============================================================================

ListId = NewType("ListId", str)
ClientId = NewType("ClientId", str)
SegmentId = NewType("SegmentId", str)
WebhookId = NewType("WebhookId", str)
CustomFieldKey = NewType("CustomFieldKey", str)

# =============================================================================
# Enums
# =============================================================================


class UnsubscribeSetting(str, Enum):
    """Scope of an unsubscribe from a list."""

    ALL_CLIENT_LISTS = "AllClientLists"
    ONLY_THIS_LIST = "OnlyThisList"


class CustomFieldDataType(str, Enum):
    TEXT = "Text"
    NUMBER = "Number"
    MULTI_SELECT_ONE = "MultiSelectOne"
    MULTI_SELECT_MANY = "MultiSelectMany"
    DATE = "Date"
    COUNTRY = "Country"
    US_STATE = "USState"


class WebhookEvent(str, Enum):
    """Subscriber events a list webhook can be registered for."""

    SUBSCRIBE = "Subscribe"
    DEACTIVATE = "Deactivate"
    UPDATE = "Update"


class PayloadFormat(str, Enum):
    JSON = "json"
    XML = "xml"


class OrderDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SubscriberState(str, Enum):
    """Listing endpoints for a list's subscribers."""

    ACTIVE = "active"
    BOUNCED = "bounced"
    UNSUBSCRIBED = "unsubscribed"
    DELETED = "deleted"


UnsubscribeSettingLike: TypeAlias = UnsubscribeSetting | str
WebhookEventLike: TypeAlias = WebhookEvent | str
PayloadFormatLike: TypeAlias = PayloadFormat | str
OrderDirectionLike: TypeAlias = OrderDirection | str
CustomFieldDataTypeLike: TypeAlias = CustomFieldDataType | str


def wire_value(value: object) -> object:
    """Return the raw value sent on the wire for an enum member or plain value."""
    if isinstance(value, Enum):
        return value.value
    return value
