"""
createsend data models.

All Pydantic models and type definitions are available from this module.
"""

from __future__ import annotations

from .entities import (
    ActiveSubscriber,
    CreateSendModel,
    CustomFieldDefinition,
    CustomFieldValue,
    ListDetails,
    ListSettings,
    ListStats,
    Segment,
    Subscriber,
    Webhook,
    normalize_custom_field_key,
    normalize_custom_fields,
)
from .pagination import SubscriberPage, page_query
from .types import (
    BASE_URL,
    ClientId,
    CustomFieldDataType,
    CustomFieldKey,
    ListId,
    OrderDirection,
    PayloadFormat,
    SegmentId,
    SubscriberState,
    UnsubscribeSetting,
    WebhookEvent,
    WebhookId,
)

__all__ = [
    "BASE_URL",
    # ID types
    "ListId",
    "ClientId",
    "SegmentId",
    "WebhookId",
    "CustomFieldKey",
    # Enums
    "UnsubscribeSetting",
    "CustomFieldDataType",
    "WebhookEvent",
    "PayloadFormat",
    "OrderDirection",
    "SubscriberState",
    # Base
    "CreateSendModel",
    # List
    "ListSettings",
    "ListDetails",
    "ListStats",
    # Custom fields
    "CustomFieldDefinition",
    "CustomFieldValue",
    "normalize_custom_field_key",
    "normalize_custom_fields",
    # Segments
    "Segment",
    # Subscribers
    "Subscriber",
    "ActiveSubscriber",
    "SubscriberPage",
    "page_query",
    # Webhooks
    "Webhook",
]
