"""
Inbound webhook parsing helpers.

Webhooks are registered per list via `ListResource.create_webhook`. This module
provides framework-agnostic helpers for parsing the JSON payloads the service
POSTs to the registered URL.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from .exceptions import (
    WebhookInvalidJsonError,
    WebhookInvalidPayloadError,
    WebhookMissingKeyError,
)
from .models.entities import CreateSendModel, normalize_custom_fields
from .models.types import ListId, WebhookEvent, WebhookEventLike, wire_value


class WebhookSubscriberEvent(CreateSendModel):
    """
    A single subscriber event inside a webhook delivery.

    - `Subscribe` events carry `SignupIPAddress`.
    - `Update` events carry `OldEmailAddress` when the address changed.
    - `Deactivate` events carry `State` ("Unsubscribed", "Deleted", ...).
    """

    type: str
    date: str | None = None
    email_address: str
    name: str | None = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)
    signup_ip_address: str | None = Field(None, alias="SignupIPAddress")
    old_email_address: str | None = None
    state: str | None = None

    @field_validator("custom_fields", mode="before")
    @classmethod
    def _normalize_custom_fields(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, list):
            return normalize_custom_fields(value)
        return value


class WebhookBatch(CreateSendModel):
    """Parsed webhook delivery: the list id and its events in delivery order."""

    list_id: ListId = Field(alias="ListID")
    events: list[WebhookSubscriberEvent] = Field(default_factory=list)

    def of_type(self, event: WebhookEventLike) -> list[WebhookSubscriberEvent]:
        wanted = wire_value(event)
        return [e for e in self.events if e.type == wanted]

    @property
    def subscribes(self) -> list[WebhookSubscriberEvent]:
        return self.of_type(WebhookEvent.SUBSCRIBE)

    @property
    def deactivations(self) -> list[WebhookSubscriberEvent]:
        return self.of_type(WebhookEvent.DEACTIVATE)

    @property
    def updates(self) -> list[WebhookSubscriberEvent]:
        return self.of_type(WebhookEvent.UPDATE)


def _parse_json_payload(payload: bytes | str) -> Any:
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WebhookInvalidJsonError("Webhook payload bytes are not valid UTF-8") from e
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise WebhookInvalidJsonError("Webhook payload is not valid JSON") from e


def _require_key(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise WebhookMissingKeyError(f"Webhook payload is missing required key: {key}", key=key)
    return data[key]


def _check_custom_fields(custom_fields: Any, index: int) -> None:
    if custom_fields is None:
        return
    if not isinstance(custom_fields, list):
        raise WebhookInvalidPayloadError(
            f"Webhook event {index} 'CustomFields' must be a JSON array"
        )
    try:
        normalize_custom_fields(custom_fields)
    except ValueError as e:
        raise WebhookInvalidPayloadError(f"Webhook event {index}: {e}") from e


def parse_webhook(payload: bytes | str | Mapping[str, Any]) -> WebhookBatch:
    """
    Parse an inbound JSON webhook payload into a `WebhookBatch`.

    Custom fields on each event are normalized the same way as the active
    subscriber listing (whitespace replaced by `_`, lowercased keys).

    Args:
        payload: Raw request body as bytes/str, or an already-decoded dict.

    Raises:
        WebhookInvalidJsonError: If payload is not valid JSON (bytes/str inputs).
        WebhookMissingKeyError: If `ListID` or `Events` is missing.
        WebhookInvalidPayloadError: If the payload or an event isn't a JSON object,
            `Events` isn't a list, or an event's `CustomFields` is not a list
            of `{Key, Value}` objects.
    """

    data: Any = _parse_json_payload(payload) if isinstance(payload, (bytes, str)) else payload

    if not isinstance(data, Mapping):
        raise WebhookInvalidPayloadError("Webhook payload must be a JSON object at the top level")

    list_id = _require_key(data, "ListID")
    events = _require_key(data, "Events")

    if not isinstance(events, list):
        raise WebhookInvalidPayloadError("Webhook 'Events' must be a JSON array")
    for index, event in enumerate(events):
        if not isinstance(event, Mapping):
            raise WebhookInvalidPayloadError(f"Webhook event {index} must be a JSON object")
        _require_key(event, "Type")
        _require_key(event, "EmailAddress")
        _check_custom_fields(event.get("CustomFields"), index)

    return WebhookBatch.model_validate({"ListID": list_id, "Events": [dict(e) for e in events]})
