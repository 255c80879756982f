from __future__ import annotations

import json

import httpx
import pytest

try:
    import respx
except ModuleNotFoundError:  # pragma: no cover - optional dev dependency
    respx = None  # type: ignore[assignment]

from createsend import AsyncCreateSend, CreateSend, ListSettings
from createsend.exceptions import ConfigurationError, UnauthorizedError
from createsend.services.lists import AsyncListResource, ListResource

if respx is None:  # pragma: no cover
    pytest.skip("respx is not installed", allow_module_level=True)

API = "https://api.createsend.com/api/v3"


def test_create_list_and_bind(respx_mock: respx.MockRouter) -> None:
    route = respx_mock.post(f"{API}/lists/client-1.json").mock(
        return_value=httpx.Response(201, json="e3c5f034d68744f7881fdccf13c2daee")
    )

    with CreateSend(api_key="k") as cs:
        list_id = cs.create_list("client-1", ListSettings(title="Newsletter"))
        lst = cs.list(list_id)

    assert list_id == "e3c5f034d68744f7881fdccf13c2daee"
    assert isinstance(lst, ListResource)
    assert lst.list_id == list_id
    assert route.call_count == 1
    assert json.loads(route.calls.last.request.content) == {
        "Title": "Newsletter",
        "UnsubscribePage": "",
        "ConfirmedOptIn": False,
        "ConfirmationSuccessPage": "",
        "UnsubscribeSetting": "AllClientLists",
    }


def test_binding_a_list_makes_no_request(respx_mock: respx.MockRouter) -> None:
    with CreateSend(api_key="k") as cs:
        cs.list("abc")
    assert respx_mock.calls.call_count == 0


def test_unauthorized(respx_mock: respx.MockRouter) -> None:
    respx_mock.get(f"{API}/lists/abc/stats.json").mock(
        return_value=httpx.Response(
            401, json={"Code": 50, "Message": "Must supply a valid HTTP Basic Authorization header"}
        )
    )
    with CreateSend(api_key="bad") as cs, pytest.raises(UnauthorizedError) as excinfo:
        cs.list("abc").stats()
    assert excinfo.value.code == 50


def test_from_env(monkeypatch: pytest.MonkeyPatch, respx_mock: respx.MockRouter) -> None:
    monkeypatch.delenv("CREATESEND_ACCESS_TOKEN", raising=False)
    monkeypatch.setenv("CREATESEND_API_KEY", "env-key")
    monkeypatch.setenv("CREATESEND_BASE_URL", "https://cm.example/api/v3/")
    route = respx_mock.get("https://cm.example/api/v3/lists/abc/segments.json").mock(
        return_value=httpx.Response(200, json=[])
    )

    with CreateSend.from_env() as cs:
        assert cs.list("abc").segments() == []
    assert route.called


def test_from_env_explicit_credentials_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CREATESEND_API_KEY", "env-key")
    with CreateSend.from_env(access_token="token") as cs:
        config = cs._http.config
    assert config.access_token == "token"
    assert config.api_key is None


def test_from_env_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CREATESEND_API_KEY", raising=False)
    monkeypatch.delenv("CREATESEND_ACCESS_TOKEN", raising=False)
    with pytest.raises(ConfigurationError):
        CreateSend.from_env()


async def test_async_client(respx_mock: respx.MockRouter) -> None:
    respx_mock.post(f"{API}/lists/client-1.json").mock(
        return_value=httpx.Response(201, json="async-list")
    )
    respx_mock.get(f"{API}/lists/async-list.json").mock(
        return_value=httpx.Response(200, json={"ListID": "async-list", "Title": "Async"})
    )

    async with AsyncCreateSend(api_key="k") as cs:
        list_id = await cs.create_list("client-1", ListSettings(title="Async"))
        lst = cs.list(list_id)
        assert isinstance(lst, AsyncListResource)
        details = await lst.details()

    assert details.list_id == "async-list"
    assert details.title == "Async"
