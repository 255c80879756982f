"""
Internal request pipeline primitives.

Requests and responses are modelled independently of httpx so cross-cutting
behavior (hooks, request logging) can be layered as middleware around the
terminal send.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias, TypedDict, cast


class ResponseContext(TypedDict, total=False):
    elapsed_seconds: float
    http_version: str


@dataclass(slots=True)
class SDKRequest:
    method: str
    path: str
    params: dict[str, Any] | None = None
    json: Any | None = None
    content: bytes | None = None

    @property
    def has_body(self) -> bool:
        return self.json is not None or self.content is not None


@dataclass(slots=True)
class SDKResponse:
    status_code: int
    url: str
    content: bytes
    headers: list[tuple[str, str]] = field(default_factory=list)
    context: ResponseContext = field(default_factory=lambda: cast(ResponseContext, {}))

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


Pipeline: TypeAlias = Callable[[SDKRequest], SDKResponse]
AsyncPipeline: TypeAlias = Callable[[SDKRequest], Awaitable[SDKResponse]]


class Middleware(Protocol):
    def __call__(self, req: SDKRequest, next: Pipeline) -> SDKResponse: ...


class AsyncMiddleware(Protocol):
    async def __call__(self, req: SDKRequest, next: AsyncPipeline) -> SDKResponse: ...


def compose(middlewares: Sequence[Middleware], terminal: Pipeline) -> Pipeline:
    """Wrap `terminal` so the first middleware in the sequence runs outermost."""
    pipeline = terminal
    for middleware in reversed(middlewares):
        next_pipeline = pipeline

        def _wrapped(
            req: SDKRequest, *, _mw: Middleware = middleware, _n: Pipeline = next_pipeline
        ) -> SDKResponse:
            return _mw(req, _n)

        pipeline = _wrapped
    return pipeline


def compose_async(middlewares: Sequence[AsyncMiddleware], terminal: AsyncPipeline) -> AsyncPipeline:
    pipeline = terminal
    for middleware in reversed(middlewares):
        next_pipeline = pipeline

        async def _wrapped(
            req: SDKRequest,
            *,
            _mw: AsyncMiddleware = middleware,
            _n: AsyncPipeline = next_pipeline,
        ) -> SDKResponse:
            return await _mw(req, _n)

        pipeline = _wrapped
    return pipeline
