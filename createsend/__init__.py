"""
createsend: a Python client for the Campaign Monitor list API.

Example:
    ```python
    from createsend import CreateSend

    with CreateSend(api_key="your-api-key") as cs:
        stats = cs.list("a58ee1d3039b8bec838e6d1482a8a965").stats()
        print(stats.total_active_subscribers)
    ```
"""

from __future__ import annotations

from .client import AsyncCreateSend, CreateSend
from .clients.http import ClientConfig, encode_path_segment
from .exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    CreateSendError,
    InvalidPathSegmentError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationError,
    WebhookInvalidJsonError,
    WebhookInvalidPayloadError,
    WebhookMissingKeyError,
    WebhookParseError,
)
from .inbound_webhooks import WebhookBatch, WebhookSubscriberEvent, parse_webhook
from .models import (
    ActiveSubscriber,
    CustomFieldDataType,
    CustomFieldDefinition,
    CustomFieldValue,
    ListDetails,
    ListId,
    ListSettings,
    ListStats,
    OrderDirection,
    PayloadFormat,
    Segment,
    Subscriber,
    SubscriberPage,
    SubscriberState,
    UnsubscribeSetting,
    Webhook,
    WebhookEvent,
)
from .services.lists import AsyncListResource, ListResource
from .version import __version__

__all__ = [
    "__version__",
    # Clients
    "CreateSend",
    "AsyncCreateSend",
    "ClientConfig",
    "ListResource",
    "AsyncListResource",
    "encode_path_segment",
    # Models
    "ListId",
    "ListSettings",
    "ListDetails",
    "ListStats",
    "CustomFieldDefinition",
    "CustomFieldValue",
    "Segment",
    "Subscriber",
    "ActiveSubscriber",
    "SubscriberPage",
    "Webhook",
    # Enums
    "UnsubscribeSetting",
    "CustomFieldDataType",
    "WebhookEvent",
    "PayloadFormat",
    "OrderDirection",
    "SubscriberState",
    # Inbound webhooks
    "parse_webhook",
    "WebhookBatch",
    "WebhookSubscriberEvent",
    # Errors
    "CreateSendError",
    "ConfigurationError",
    "ValidationError",
    "InvalidPathSegmentError",
    "NetworkError",
    "InvalidResponseError",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "ClientError",
    "ServerError",
    "WebhookParseError",
    "WebhookInvalidJsonError",
    "WebhookInvalidPayloadError",
    "WebhookMissingKeyError",
]
