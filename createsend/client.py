"""
Main createsend API client.

Owns the HTTP connection pool and hands out list resources bound to it.
"""

from __future__ import annotations

import os
from typing import Any

import httpx

from .clients.http import (
    DEFAULT_USER_AGENT,
    AsyncHTTPClient,
    ClientConfig,
    HTTPClient,
    RequestHook,
    ResponseHook,
)
from .models.entities import ListSettings
from .models.types import (
    BASE_URL,
    ClientId,
    ListId,
    UnsubscribeSetting,
    UnsubscribeSettingLike,
)
from .services.lists import AsyncListResource, ListResource

API_KEY_ENV = "CREATESEND_API_KEY"
ACCESS_TOKEN_ENV = "CREATESEND_ACCESS_TOKEN"
BASE_URL_ENV = "CREATESEND_BASE_URL"


def _config_kwargs_from_env() -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    api_key = os.getenv(API_KEY_ENV, "").strip()
    access_token = os.getenv(ACCESS_TOKEN_ENV, "").strip()
    base_url = os.getenv(BASE_URL_ENV, "").strip()
    if api_key:
        kwargs["api_key"] = api_key
    if access_token:
        kwargs["access_token"] = access_token
    if base_url:
        kwargs["base_url"] = base_url
    return kwargs


def _merge_env(overrides: dict[str, Any]) -> dict[str, Any]:
    kwargs = _config_kwargs_from_env()
    if "api_key" in overrides or "access_token" in overrides:
        kwargs.pop("api_key", None)
        kwargs.pop("access_token", None)
    kwargs.update(overrides)
    return kwargs


class CreateSend:
    """
    Synchronous createsend API client.

    Example:
        ```python
        from createsend import CreateSend, ListSettings

        with CreateSend(api_key="your-api-key") as cs:
            list_id = cs.create_list(
                "4a397ccaaa55eb4e6aa1221e1e2d7122",
                ListSettings(title="Newsletter"),
            )
            lst = cs.list(list_id)
            key = lst.create_custom_field("Favourite colour", "MultiSelectOne", ["Red", "Blue"])
            for page in lst.pages("active", "2024-01-01"):
                for subscriber in page.results:
                    print(subscriber.email_address, subscriber.custom_fields)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        access_token: str | None = None,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        log_requests: bool = False,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
        on_request: RequestHook | None = None,
        on_response: ResponseHook | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Campaign Monitor API key (sent via HTTP basic auth)
            access_token: OAuth access token, as an alternative to `api_key`
            base_url: API root (default: https://api.createsend.com/api/v3/)
            timeout: Request timeout in seconds
            log_requests: Log every request/response at DEBUG level
            transport: Custom httpx transport (e.g. `httpx.MockTransport` in tests)
        """
        config = ClientConfig(
            api_key=api_key,
            access_token=access_token,
            base_url=base_url,
            timeout=timeout,
            log_requests=log_requests,
            user_agent=user_agent,
            transport=transport,
            on_request=on_request,
            on_response=on_response,
        )
        self._http = HTTPClient(config)

    @classmethod
    def from_env(cls, **kwargs: Any) -> CreateSend:
        """
        Build a client from `CREATESEND_API_KEY` / `CREATESEND_ACCESS_TOKEN` and
        `CREATESEND_BASE_URL`. Explicit keyword arguments take precedence.
        """
        return cls(**_merge_env(kwargs))

    def __enter__(self) -> CreateSend:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._http.close()

    def list(self, list_id: ListId | str) -> ListResource:
        """Return a resource bound to `list_id`. No request is made."""
        return ListResource(self._http, list_id)

    def create_list(
        self,
        client_id: ClientId | str,
        settings: ListSettings,
        unsubscribe_setting: UnsubscribeSettingLike = UnsubscribeSetting.ALL_CLIENT_LISTS,
    ) -> ListId:
        """Create a list for `client_id` and return its id."""
        return ListResource.create(self._http, client_id, settings, unsubscribe_setting)


class AsyncCreateSend:
    """
    Asynchronous createsend API client.

    Same interface as CreateSend but with async/await support.

    Example:
        ```python
        async with AsyncCreateSend(api_key="your-key") as cs:
            stats = await cs.list("a58ee1d3039b8bec838e6d1482a8a965").stats()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        access_token: str | None = None,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        log_requests: bool = False,
        user_agent: str = DEFAULT_USER_AGENT,
        async_transport: httpx.AsyncBaseTransport | None = None,
        on_request: RequestHook | None = None,
        on_response: ResponseHook | None = None,
    ):
        config = ClientConfig(
            api_key=api_key,
            access_token=access_token,
            base_url=base_url,
            timeout=timeout,
            log_requests=log_requests,
            user_agent=user_agent,
            async_transport=async_transport,
            on_request=on_request,
            on_response=on_response,
        )
        self._http = AsyncHTTPClient(config)

    @classmethod
    def from_env(cls, **kwargs: Any) -> AsyncCreateSend:
        return cls(**_merge_env(kwargs))

    async def __aenter__(self) -> AsyncCreateSend:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.close()

    def list(self, list_id: ListId | str) -> AsyncListResource:
        return AsyncListResource(self._http, list_id)

    async def create_list(
        self,
        client_id: ClientId | str,
        settings: ListSettings,
        unsubscribe_setting: UnsubscribeSettingLike = UnsubscribeSetting.ALL_CLIENT_LISTS,
    ) -> ListId:
        return await AsyncListResource.create(self._http, client_id, settings, unsubscribe_setting)
