"""
HTTP client layer.

Wraps httpx with the createsend base URL, authentication, JSON encoding and
error mapping. Services call `get` / `post` / `put` / `delete` with a path
relative to the API root and receive the decoded JSON body.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from ..exceptions import (
    ConfigurationError,
    InvalidPathSegmentError,
    InvalidResponseError,
    NetworkError,
    error_for_status,
)
from ..models.types import BASE_URL
from ..version import __version__
from .pipeline import (
    AsyncMiddleware,
    AsyncPipeline,
    Middleware,
    Pipeline,
    SDKRequest,
    SDKResponse,
    compose,
    compose_async,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"createsend-python/{__version__}"

RequestHook = Callable[[SDKRequest], None]
ResponseHook = Callable[[SDKResponse], None]


def encode_path_segment(value: Any) -> str:
    """
    Percent-encode a caller-supplied value for use as a single URL path segment.

    Every reserved character is escaped, including `/`, `[` and `]`.

    Raises:
        InvalidPathSegmentError: If the value is not a non-empty string that can be
            encoded as UTF-8.
    """
    if not isinstance(value, str):
        raise InvalidPathSegmentError(
            f"Path segment must be a string, got {type(value).__name__}", value=value
        )
    if not value:
        raise InvalidPathSegmentError("Path segment cannot be empty", value=value)
    try:
        return quote(value, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise InvalidPathSegmentError(
            f"Path segment is not encodable as UTF-8: {value!r}", value=value
        ) from e


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Settings shared by `HTTPClient` and `AsyncHTTPClient`.

    Exactly one of `api_key` (HTTP basic auth) or `access_token` (OAuth bearer)
    must be provided.
    """

    api_key: str | None = None
    access_token: str | None = None
    base_url: str = BASE_URL
    timeout: float = 30.0
    log_requests: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    headers: Mapping[str, str] | None = None
    transport: httpx.BaseTransport | None = None
    async_transport: httpx.AsyncBaseTransport | None = None
    on_request: RequestHook | None = None
    on_response: ResponseHook | None = None

    def __post_init__(self) -> None:
        if not self.api_key and not self.access_token:
            raise ConfigurationError("An api_key or an access_token is required")
        if self.api_key and self.access_token:
            raise ConfigurationError("Provide either api_key or access_token, not both")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.headers:
            headers.update(self.headers)
        return headers

    def build_auth(self) -> httpx.Auth | None:
        # Campaign Monitor takes the API key as the basic-auth username; the
        # password is ignored.
        if self.api_key:
            return httpx.BasicAuth(self.api_key, "x")
        return None

    def build_base_url(self) -> str:
        return self.base_url if self.base_url.endswith("/") else self.base_url + "/"


# =============================================================================
# Shared helpers
# =============================================================================


def _to_sdk_response(response: httpx.Response, elapsed: float) -> SDKResponse:
    return SDKResponse(
        status_code=response.status_code,
        url=str(response.request.url),
        content=response.content,
        headers=list(response.headers.multi_items()),
        context={"elapsed_seconds": elapsed, "http_version": response.http_version},
    )


def _decode_error_payload(content: bytes) -> Any:
    if not content:
        return None
    try:
        return json.loads(content)
    except ValueError:
        return content.decode("utf-8", errors="replace")


def _handle_response(req: SDKRequest, resp: SDKResponse) -> Any:
    if not resp.is_success:
        raise error_for_status(
            resp.status_code,
            _decode_error_payload(resp.content),
            method=req.method,
            url=resp.url,
        )
    if not resp.content.strip():
        return None
    try:
        return json.loads(resp.content)
    except ValueError as e:
        raise InvalidResponseError(
            f"Response to {req.method} {resp.url} is not valid JSON"
        ) from e


def _build_request_kwargs(req: SDKRequest) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if req.params:
        kwargs["params"] = req.params
    if req.json is not None:
        kwargs["json"] = req.json
    elif req.content is not None:
        kwargs["content"] = req.content
    return kwargs


def _hooks_middleware(config: ClientConfig) -> Middleware:
    def middleware(req: SDKRequest, next: Pipeline) -> SDKResponse:
        if config.on_request is not None:
            config.on_request(req)
        resp = next(req)
        if config.on_response is not None:
            config.on_response(resp)
        return resp

    return middleware


def _async_hooks_middleware(config: ClientConfig) -> AsyncMiddleware:
    async def middleware(req: SDKRequest, next: AsyncPipeline) -> SDKResponse:
        if config.on_request is not None:
            config.on_request(req)
        resp = await next(req)
        if config.on_response is not None:
            config.on_response(resp)
        return resp

    return middleware


def _log_request(req: SDKRequest) -> None:
    logger.debug("%s %s params=%s body=%s", req.method, req.path, req.params, req.has_body)


def _log_response(req: SDKRequest, resp: SDKResponse) -> None:
    logger.debug(
        "%s %s -> %s (%.3fs)",
        req.method,
        resp.url,
        resp.status_code,
        resp.context.get("elapsed_seconds", 0.0),
    )


def _logging_middleware(req: SDKRequest, next: Pipeline) -> SDKResponse:
    _log_request(req)
    resp = next(req)
    _log_response(req, resp)
    return resp


async def _async_logging_middleware(req: SDKRequest, next: AsyncPipeline) -> SDKResponse:
    _log_request(req)
    resp = await next(req)
    _log_response(req, resp)
    return resp


# =============================================================================
# Sync client
# =============================================================================


class HTTPClient:
    """Synchronous HTTP client for the createsend API."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._client = httpx.Client(
            base_url=config.build_base_url(),
            headers=config.build_headers(),
            auth=config.build_auth(),
            timeout=config.timeout,
            transport=config.transport,
        )
        middlewares: list[Middleware] = [_hooks_middleware(config)]
        if config.log_requests:
            middlewares.append(_logging_middleware)
        self._pipeline = compose(middlewares, self._send)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return self._request(SDKRequest("GET", path, params=params))

    def post(self, path: str, *, json: Any | None = None) -> Any:
        return self._request(SDKRequest("POST", path, json=json))

    def put(self, path: str, *, json: Any | None = None, content: bytes | None = None) -> Any:
        return self._request(SDKRequest("PUT", path, json=json, content=content))

    def delete(self, path: str) -> Any:
        return self._request(SDKRequest("DELETE", path))

    def _request(self, req: SDKRequest) -> Any:
        resp = self._pipeline(req)
        return _handle_response(req, resp)

    def _send(self, req: SDKRequest) -> SDKResponse:
        started = time.monotonic()
        try:
            response = self._client.request(req.method, req.path, **_build_request_kwargs(req))
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out: {req.method} {req.path}", method=req.method, url=req.path
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Request failed: {req.method} {req.path}: {e}", method=req.method, url=req.path
            ) from e
        return _to_sdk_response(response, time.monotonic() - started)


# =============================================================================
# Async client
# =============================================================================


class AsyncHTTPClient:
    """Asynchronous HTTP client for the createsend API."""

    def __init__(self, config: ClientConfig):
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.build_base_url(),
            headers=config.build_headers(),
            auth=config.build_auth(),
            timeout=config.timeout,
            transport=config.async_transport,
        )
        middlewares: list[AsyncMiddleware] = [_async_hooks_middleware(config)]
        if config.log_requests:
            middlewares.append(_async_logging_middleware)
        self._pipeline = compose_async(middlewares, self._send)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> AsyncHTTPClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self._request(SDKRequest("GET", path, params=params))

    async def post(self, path: str, *, json: Any | None = None) -> Any:
        return await self._request(SDKRequest("POST", path, json=json))

    async def put(
        self, path: str, *, json: Any | None = None, content: bytes | None = None
    ) -> Any:
        return await self._request(SDKRequest("PUT", path, json=json, content=content))

    async def delete(self, path: str) -> Any:
        return await self._request(SDKRequest("DELETE", path))

    async def _request(self, req: SDKRequest) -> Any:
        resp = await self._pipeline(req)
        return _handle_response(req, resp)

    async def _send(self, req: SDKRequest) -> SDKResponse:
        started = time.monotonic()
        try:
            response = await self._client.request(
                req.method, req.path, **_build_request_kwargs(req)
            )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out: {req.method} {req.path}", method=req.method, url=req.path
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Request failed: {req.method} {req.path}: {e}", method=req.method, url=req.path
            ) from e
        return _to_sdk_response(response, time.monotonic() - started)
