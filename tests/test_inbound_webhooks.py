from __future__ import annotations

import json
from pathlib import Path

import pytest

from createsend.exceptions import (
    WebhookInvalidJsonError,
    WebhookInvalidPayloadError,
    WebhookMissingKeyError,
)
from createsend.inbound_webhooks import WebhookBatch, parse_webhook
from createsend.models.types import WebhookEvent

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "webhooks"


def _load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def test_parse_subscribe_event() -> None:
    batch = parse_webhook(_load_fixture("subscribe.json"))
    assert isinstance(batch, WebhookBatch)
    assert batch.list_id == "96c0bbdfe54d8f2f4ba0a4f6d3a3fe3d"
    [event] = batch.events
    assert event.type == "Subscribe"
    assert event.email_address == "test@example.org"
    assert event.signup_ip_address == "53.78.1.2"
    assert event.custom_fields == {
        "website": "http://example.org",
        "favourite_colour": "Red",
    }


def test_parse_webhook_accepts_bytes_and_str() -> None:
    payload = _load_fixture("subscribe.json")
    raw = json.dumps(payload)
    assert parse_webhook(raw).events[0].name == "Test Subscriber"
    assert parse_webhook(raw.encode("utf-8")).events[0].name == "Test Subscriber"


def test_events_by_type_keep_delivery_order() -> None:
    batch = parse_webhook(_load_fixture("mixed.json"))
    assert [e.type for e in batch.events] == ["Update", "Deactivate", "Subscribe"]

    [update] = batch.updates
    assert update.old_email_address == "old@example.org"
    assert update.email_address == "new@example.org"
    assert update.custom_fields == {}

    [deactivation] = batch.deactivations
    assert deactivation.state == "Unsubscribed"
    assert deactivation.custom_fields == {"source_campaign": "spring"}

    [subscribe] = batch.of_type(WebhookEvent.SUBSCRIBE)
    assert subscribe.custom_fields == {}
    assert batch.of_type("Subscribe") == batch.subscribes


def test_parse_webhook_invalid_json() -> None:
    with pytest.raises(WebhookInvalidJsonError):
        parse_webhook("{not json")
    with pytest.raises(WebhookInvalidJsonError):
        parse_webhook(b"\xff\xfe")


def test_parse_webhook_invalid_shapes() -> None:
    with pytest.raises(WebhookInvalidPayloadError):
        parse_webhook("[]")
    with pytest.raises(WebhookInvalidPayloadError):
        parse_webhook({"ListID": "x", "Events": {"Type": "Subscribe"}})
    with pytest.raises(WebhookInvalidPayloadError):
        parse_webhook({"ListID": "x", "Events": ["Subscribe"]})


@pytest.mark.parametrize(
    ("payload", "missing"),
    [
        ({"Events": []}, "ListID"),
        ({"ListID": "x"}, "Events"),
        ({"ListID": "x", "Events": [{"EmailAddress": "a@example.org"}]}, "Type"),
        ({"ListID": "x", "Events": [{"Type": "Subscribe"}]}, "EmailAddress"),
    ],
)
def test_parse_webhook_missing_keys(payload: dict, missing: str) -> None:
    with pytest.raises(WebhookMissingKeyError) as excinfo:
        parse_webhook(payload)
    assert excinfo.value.key == missing


@pytest.mark.parametrize(
    "custom_fields",
    [
        ["oops"],
        [{"Value": "Red"}],
        [{"Key": None, "Value": "Red"}],
        {"Key": "Website", "Value": "http://example.org"},
    ],
)
def test_parse_webhook_rejects_malformed_custom_fields(custom_fields: object) -> None:
    payload = _load_fixture("subscribe.json")
    payload["Events"][0]["CustomFields"] = custom_fields
    with pytest.raises(WebhookInvalidPayloadError):
        parse_webhook(payload)


def test_parse_webhook_accepts_null_custom_fields() -> None:
    payload = _load_fixture("subscribe.json")
    payload["Events"][0]["CustomFields"] = None
    assert parse_webhook(payload).events[0].custom_fields == {}
