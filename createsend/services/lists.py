"""
List service.

`ListResource` is bound to a single list id and maps each operation of the
list API onto one HTTP round trip. `AsyncListResource` mirrors it for
`AsyncHTTPClient`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Sequence
from datetime import date as _date
from typing import TYPE_CHECKING, Any

from ..clients.http import encode_path_segment
from ..exceptions import ValidationError
from ..models.entities import (
    ActiveSubscriber,
    CustomFieldDefinition,
    ListDetails,
    ListSettings,
    ListStats,
    Segment,
    Subscriber,
    Webhook,
)
from ..models.pagination import (
    DEFAULT_ORDER_DIRECTION,
    DEFAULT_ORDER_FIELD,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    SubscriberPage,
    page_query,
)
from ..models.types import (
    ClientId,
    CustomFieldDataTypeLike,
    CustomFieldKey,
    ListId,
    OrderDirectionLike,
    PayloadFormatLike,
    SubscriberState,
    UnsubscribeSetting,
    UnsubscribeSettingLike,
    WebhookEventLike,
    WebhookId,
    wire_value,
)

if TYPE_CHECKING:
    from ..clients.http import AsyncHTTPClient, HTTPClient


# =============================================================================
# Request bodies (shared by sync and async resources)
# =============================================================================


def _list_body(
    settings: ListSettings,
    unsubscribe_setting: UnsubscribeSettingLike,
) -> dict[str, Any]:
    body = settings.model_dump(by_alias=True)
    body["UnsubscribeSetting"] = wire_value(unsubscribe_setting)
    return body


def _update_body(
    settings: ListSettings,
    unsubscribe_setting: UnsubscribeSettingLike,
    add_unsubscribes_to_supp_list: bool,
    scrub_active_with_supp_list: bool,
) -> dict[str, Any]:
    # Both suppression flags only take effect with AllClientLists, but the
    # service expects them on every update.
    body = _list_body(settings, unsubscribe_setting)
    body["AddUnsubscribesToSuppList"] = add_unsubscribes_to_supp_list
    body["ScrubActiveWithSuppList"] = scrub_active_with_supp_list
    return body


def _custom_field_body(
    field_name: str,
    data_type: CustomFieldDataTypeLike,
    options: Sequence[str],
) -> dict[str, Any]:
    return {
        "FieldName": field_name,
        "DataType": wire_value(data_type),
        "Options": list(options),
    }


def _webhook_body(
    events: Sequence[WebhookEventLike],
    url: str,
    payload_format: PayloadFormatLike,
) -> dict[str, Any]:
    return {
        "Events": [wire_value(event) for event in events],
        "Url": url,
        "PayloadFormat": wire_value(payload_format),
    }


def _subscriber_state(state: SubscriberState | str) -> SubscriberState:
    try:
        return SubscriberState(wire_value(state))
    except ValueError as e:
        raise ValidationError(f"Unknown subscriber state: {state!r}") from e


def _page_model(state: SubscriberState) -> type[SubscriberPage[Any]]:
    # Only the active listing exposes custom fields as a normalized mapping.
    if state is SubscriberState.ACTIVE:
        return SubscriberPage[ActiveSubscriber]
    return SubscriberPage[Subscriber]


class _ListPaths:
    """Path construction for a bound list id."""

    def __init__(self, list_id: ListId | str):
        self._list_id = ListId(list_id)
        self._root = f"lists/{encode_path_segment(list_id)}"

    @property
    def list_id(self) -> ListId:
        return self._list_id

    def _list_path(self) -> str:
        return f"{self._root}.json"

    def _path(self, *segments: str) -> str:
        return f"{self._root}/{'/'.join(segments)}.json"

    def _custom_field_path(self, field_key: str, *rest: str) -> str:
        return self._path("customfields", encode_path_segment(field_key), *rest)

    def _webhook_path(self, webhook_id: str, *rest: str) -> str:
        return self._path("webhooks", encode_path_segment(webhook_id), *rest)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(list_id={self._list_id!r})"


# =============================================================================
# Sync resource
# =============================================================================


class ListResource(_ListPaths):
    """
    Operations on one subscriber list.

    Every method performs a single request and raises `APIError` (or a subclass)
    if the service rejects it. Arguments are forwarded unchanged; enum
    membership, dates and required fields are validated by the service.

    Example:
        ```python
        with CreateSend(api_key="...") as cs:
            lst = cs.list("a58ee1d3039b8bec838e6d1482a8a965")
            page = lst.active("2024-01-01")
            for subscriber in page.results:
                print(subscriber.email_address, subscriber.custom_fields)
        ```
    """

    def __init__(self, client: HTTPClient, list_id: ListId | str):
        super().__init__(list_id)
        self._client = client

    # =========================================================================
    # List-level operations
    # =========================================================================

    @classmethod
    def create(
        cls,
        client: HTTPClient,
        client_id: ClientId | str,
        settings: ListSettings,
        unsubscribe_setting: UnsubscribeSettingLike = UnsubscribeSetting.ALL_CLIENT_LISTS,
    ) -> ListId:
        """
        Create a list for a client.

        Returns:
            The id assigned by the service, exactly as returned.
        """
        path = f"lists/{encode_path_segment(client_id)}.json"
        result = client.post(path, json=_list_body(settings, unsubscribe_setting))
        return ListId(result)

    def delete(self) -> None:
        """Delete this list."""
        self._client.delete(self._list_path())

    def details(self) -> ListDetails:
        data = self._client.get(self._list_path())
        return ListDetails.model_validate(data)

    def update(
        self,
        settings: ListSettings,
        unsubscribe_setting: UnsubscribeSettingLike = UnsubscribeSetting.ALL_CLIENT_LISTS,
        add_unsubscribes_to_supp_list: bool = False,
        scrub_active_with_supp_list: bool = False,
    ) -> None:
        """
        Replace this list's settings.

        Args:
            settings: New title, unsubscribe page, opt-in mode and confirmation page
            unsubscribe_setting: "AllClientLists" or "OnlyThisList"
            add_unsubscribes_to_supp_list: With AllClientLists, add this list's
                unsubscribes to the client's suppression list
            scrub_active_with_supp_list: With AllClientLists, remove active
                subscribers that appear on the suppression list
        """
        body = _update_body(
            settings,
            unsubscribe_setting,
            add_unsubscribes_to_supp_list,
            scrub_active_with_supp_list,
        )
        self._client.put(self._list_path(), json=body)

    def stats(self) -> ListStats:
        data = self._client.get(self._path("stats"))
        return ListStats.model_validate(data)

    # =========================================================================
    # Custom fields
    # =========================================================================

    def create_custom_field(
        self,
        field_name: str,
        data_type: CustomFieldDataTypeLike,
        options: Sequence[str] = (),
    ) -> CustomFieldKey:
        """
        Create a custom field.

        `options` only applies to the multi-select data types.

        Returns:
            The key assigned to the field, e.g. "[MyField]".
        """
        body = _custom_field_body(field_name, data_type, options)
        result = self._client.post(self._path("customfields"), json=body)
        return CustomFieldKey(result)

    def delete_custom_field(self, field_key: CustomFieldKey | str) -> None:
        self._client.delete(self._custom_field_path(field_key))

    def update_custom_field_options(
        self,
        field_key: CustomFieldKey | str,
        new_options: Sequence[str],
        keep_existing_options: bool,
    ) -> None:
        """
        Change the allowed values of a multi-select custom field.

        With `keep_existing_options`, `new_options` are merged into the current
        values; otherwise they replace them.
        """
        body = {"Options": list(new_options), "KeepExistingOptions": keep_existing_options}
        self._client.put(self._custom_field_path(field_key, "options"), json=body)

    def custom_fields(self) -> list[CustomFieldDefinition]:
        data = self._client.get(self._path("customfields"))
        return [CustomFieldDefinition.model_validate(item) for item in data or []]

    # =========================================================================
    # Segments & subscribers
    # =========================================================================

    def segments(self) -> list[Segment]:
        data = self._client.get(self._path("segments"))
        return [Segment.model_validate(item) for item in data or []]

    def _subscribers(
        self,
        state: SubscriberState,
        date: str | _date,
        page: int,
        page_size: int,
        order_field: str,
        order_direction: OrderDirectionLike,
    ) -> SubscriberPage[Any]:
        params = page_query(
            date,
            page=page,
            page_size=page_size,
            order_field=order_field,
            order_direction=order_direction,
        )
        data = self._client.get(self._path(state.value), params=params)
        return _page_model(state).model_validate(data)

    def active(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[ActiveSubscriber]:
        """
        Get a page of active subscribers added on or after `date`.

        Custom fields are returned as a mapping keyed by the lowercased field
        key with whitespace replaced by underscores.
        """
        return self._subscribers(
            SubscriberState.ACTIVE, date, page, page_size, order_field, order_direction
        )

    def bounced(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[Subscriber]:
        """Get a page of subscribers who bounced on or after `date`."""
        return self._subscribers(
            SubscriberState.BOUNCED, date, page, page_size, order_field, order_direction
        )

    def unsubscribed(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[Subscriber]:
        """Get a page of subscribers who unsubscribed on or after `date`."""
        return self._subscribers(
            SubscriberState.UNSUBSCRIBED, date, page, page_size, order_field, order_direction
        )

    def deleted(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[Subscriber]:
        """Get a page of subscribers deleted on or after `date`."""
        return self._subscribers(
            SubscriberState.DELETED, date, page, page_size, order_field, order_direction
        )

    def pages(
        self,
        state: SubscriberState | str,
        date: str | _date,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> Iterator[SubscriberPage[Any]]:
        """
        Iterate every page of one subscriber listing, starting at page 1.

        Each page is one request. Page numbers are counted locally and iteration
        stops once the requested page reaches `NumberOfPages`.
        """
        resolved = _subscriber_state(state)
        page_no = DEFAULT_PAGE
        while True:
            page = self._subscribers(
                resolved, date, page_no, page_size, order_field, order_direction
            )
            yield page
            if page_no >= page.number_of_pages:
                return
            page_no += 1

    # =========================================================================
    # Webhooks
    # =========================================================================

    def webhooks(self) -> list[Webhook]:
        data = self._client.get(self._path("webhooks"))
        return [Webhook.model_validate(item) for item in data or []]

    def create_webhook(
        self,
        events: Sequence[WebhookEventLike],
        url: str,
        payload_format: PayloadFormatLike,
    ) -> WebhookId:
        """
        Register a webhook for `events` ("Subscribe", "Deactivate", "Update").

        Returns:
            The id assigned to the webhook.
        """
        body = _webhook_body(events, url, payload_format)
        result = self._client.post(self._path("webhooks"), json=body)
        return WebhookId(result)

    def test_webhook(self, webhook_id: WebhookId | str) -> bool:
        """
        Ask the service to deliver a test request to the webhook's URL.

        Returns True; a failed delivery is reported by the service as an error
        response and raised as `APIError`.
        """
        self._client.get(self._webhook_path(webhook_id, "test"))
        return True

    def delete_webhook(self, webhook_id: WebhookId | str) -> None:
        self._client.delete(self._webhook_path(webhook_id))

    def activate_webhook(self, webhook_id: WebhookId | str) -> None:
        self._client.put(self._webhook_path(webhook_id, "activate"), content=b"")

    def deactivate_webhook(self, webhook_id: WebhookId | str) -> None:
        self._client.put(self._webhook_path(webhook_id, "deactivate"), content=b"")


# =============================================================================
# Async resource
# =============================================================================


class AsyncListResource(_ListPaths):
    """Async version of ListResource."""

    def __init__(self, client: AsyncHTTPClient, list_id: ListId | str):
        super().__init__(list_id)
        self._client = client

    @classmethod
    async def create(
        cls,
        client: AsyncHTTPClient,
        client_id: ClientId | str,
        settings: ListSettings,
        unsubscribe_setting: UnsubscribeSettingLike = UnsubscribeSetting.ALL_CLIENT_LISTS,
    ) -> ListId:
        path = f"lists/{encode_path_segment(client_id)}.json"
        result = await client.post(path, json=_list_body(settings, unsubscribe_setting))
        return ListId(result)

    async def delete(self) -> None:
        await self._client.delete(self._list_path())

    async def details(self) -> ListDetails:
        data = await self._client.get(self._list_path())
        return ListDetails.model_validate(data)

    async def update(
        self,
        settings: ListSettings,
        unsubscribe_setting: UnsubscribeSettingLike = UnsubscribeSetting.ALL_CLIENT_LISTS,
        add_unsubscribes_to_supp_list: bool = False,
        scrub_active_with_supp_list: bool = False,
    ) -> None:
        body = _update_body(
            settings,
            unsubscribe_setting,
            add_unsubscribes_to_supp_list,
            scrub_active_with_supp_list,
        )
        await self._client.put(self._list_path(), json=body)

    async def stats(self) -> ListStats:
        data = await self._client.get(self._path("stats"))
        return ListStats.model_validate(data)

    async def create_custom_field(
        self,
        field_name: str,
        data_type: CustomFieldDataTypeLike,
        options: Sequence[str] = (),
    ) -> CustomFieldKey:
        body = _custom_field_body(field_name, data_type, options)
        result = await self._client.post(self._path("customfields"), json=body)
        return CustomFieldKey(result)

    async def delete_custom_field(self, field_key: CustomFieldKey | str) -> None:
        await self._client.delete(self._custom_field_path(field_key))

    async def update_custom_field_options(
        self,
        field_key: CustomFieldKey | str,
        new_options: Sequence[str],
        keep_existing_options: bool,
    ) -> None:
        body = {"Options": list(new_options), "KeepExistingOptions": keep_existing_options}
        await self._client.put(self._custom_field_path(field_key, "options"), json=body)

    async def custom_fields(self) -> list[CustomFieldDefinition]:
        data = await self._client.get(self._path("customfields"))
        return [CustomFieldDefinition.model_validate(item) for item in data or []]

    async def segments(self) -> list[Segment]:
        data = await self._client.get(self._path("segments"))
        return [Segment.model_validate(item) for item in data or []]

    async def _subscribers(
        self,
        state: SubscriberState,
        date: str | _date,
        page: int,
        page_size: int,
        order_field: str,
        order_direction: OrderDirectionLike,
    ) -> SubscriberPage[Any]:
        params = page_query(
            date,
            page=page,
            page_size=page_size,
            order_field=order_field,
            order_direction=order_direction,
        )
        data = await self._client.get(self._path(state.value), params=params)
        return _page_model(state).model_validate(data)

    async def active(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[ActiveSubscriber]:
        return await self._subscribers(
            SubscriberState.ACTIVE, date, page, page_size, order_field, order_direction
        )

    async def bounced(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[Subscriber]:
        return await self._subscribers(
            SubscriberState.BOUNCED, date, page, page_size, order_field, order_direction
        )

    async def unsubscribed(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[Subscriber]:
        return await self._subscribers(
            SubscriberState.UNSUBSCRIBED, date, page, page_size, order_field, order_direction
        )

    async def deleted(
        self,
        date: str | _date,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> SubscriberPage[Subscriber]:
        return await self._subscribers(
            SubscriberState.DELETED, date, page, page_size, order_field, order_direction
        )

    async def pages(
        self,
        state: SubscriberState | str,
        date: str | _date,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        order_field: str = DEFAULT_ORDER_FIELD,
        order_direction: OrderDirectionLike = DEFAULT_ORDER_DIRECTION,
    ) -> AsyncIterator[SubscriberPage[Any]]:
        resolved = _subscriber_state(state)
        page_no = DEFAULT_PAGE
        while True:
            page = await self._subscribers(
                resolved, date, page_no, page_size, order_field, order_direction
            )
            yield page
            if page_no >= page.number_of_pages:
                return
            page_no += 1

    async def webhooks(self) -> list[Webhook]:
        data = await self._client.get(self._path("webhooks"))
        return [Webhook.model_validate(item) for item in data or []]

    async def create_webhook(
        self,
        events: Sequence[WebhookEventLike],
        url: str,
        payload_format: PayloadFormatLike,
    ) -> WebhookId:
        body = _webhook_body(events, url, payload_format)
        result = await self._client.post(self._path("webhooks"), json=body)
        return WebhookId(result)

    async def test_webhook(self, webhook_id: WebhookId | str) -> bool:
        await self._client.get(self._webhook_path(webhook_id, "test"))
        return True

    async def delete_webhook(self, webhook_id: WebhookId | str) -> None:
        await self._client.delete(self._webhook_path(webhook_id))

    async def activate_webhook(self, webhook_id: WebhookId | str) -> None:
        await self._client.put(self._webhook_path(webhook_id, "activate"), content=b"")

    async def deactivate_webhook(self, webhook_id: WebhookId | str) -> None:
        await self._client.put(self._webhook_path(webhook_id, "deactivate"), content=b"")
