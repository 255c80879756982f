"""
Exception hierarchy for the createsend SDK.

Every error raised by the SDK derives from `CreateSendError`. Non-2xx API
responses are all `APIError`; the status-specific subclasses exist so callers
can narrow their handling without inspecting `status_code`.
"""

from __future__ import annotations

from typing import Any


class CreateSendError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(CreateSendError):
    """Client configuration is missing or ambiguous (e.g. credentials)."""


class ValidationError(CreateSendError, ValueError):
    """A caller-supplied value was rejected locally, before any request was sent."""


class InvalidPathSegmentError(ValidationError):
    """A value interpolated into a URL path could not be percent-encoded."""

    def __init__(self, message: str, *, value: Any = None):
        super().__init__(message)
        self.value = value


class NetworkError(CreateSendError):
    """The request did not produce an HTTP response (connect failure, timeout, ...)."""

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None):
        super().__init__(message)
        self.method = method
        self.url = url


class InvalidResponseError(CreateSendError):
    """A successful response carried a body that is not valid JSON."""


class APIError(CreateSendError):
    """
    The API answered with a non-success status.

    Attributes:
        status_code: HTTP status of the response
        code: Service error code (`Code` in the error payload), when present
        message: Service error message (`Message` in the error payload), when present
        payload: The decoded error body, or None if it was empty or not JSON
        method: HTTP method of the failed request
        url: URL of the failed request
    """

    def __init__(
        self,
        status_code: int,
        *,
        code: int | None = None,
        message: str | None = None,
        payload: Any = None,
        method: str | None = None,
        url: str | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.payload = payload
        self.method = method
        self.url = url
        super().__init__(self._describe())

    def _describe(self) -> str:
        text = f"The CreateSend API responded with HTTP {self.status_code}"
        if self.code is not None or self.message:
            text += f" - {self.code}: {self.message}"
        if self.method and self.url:
            text += f" ({self.method} {self.url})"
        return text


class BadRequestError(APIError):
    """HTTP 400."""


class UnauthorizedError(APIError):
    """HTTP 401."""


class NotFoundError(APIError):
    """HTTP 404."""


class ClientError(APIError):
    """Any other 4xx status."""


class ServerError(APIError):
    """5xx status."""


def error_for_status(
    status_code: int,
    payload: Any,
    *,
    method: str | None = None,
    url: str | None = None,
) -> APIError:
    """Build the `APIError` subclass matching `status_code` from a decoded error body."""
    if status_code == 400:
        cls: type[APIError] = BadRequestError
    elif status_code == 401:
        cls = UnauthorizedError
    elif status_code == 404:
        cls = NotFoundError
    elif 400 <= status_code < 500:
        cls = ClientError
    elif 500 <= status_code < 600:
        cls = ServerError
    else:
        cls = APIError

    code: int | None = None
    message: str | None = None
    if isinstance(payload, dict):
        raw_code = payload.get("Code")
        if isinstance(raw_code, int) and not isinstance(raw_code, bool):
            code = raw_code
        elif isinstance(raw_code, str) and raw_code.strip().isdigit():
            code = int(raw_code)
        raw_message = payload.get("Message")
        if raw_message is not None:
            message = str(raw_message)

    return cls(
        status_code,
        code=code,
        message=message,
        payload=payload,
        method=method,
        url=url,
    )


# =============================================================================
# Inbound webhook parsing
# =============================================================================


class WebhookParseError(CreateSendError):
    """Base class for inbound webhook payload errors."""


class WebhookInvalidJsonError(WebhookParseError):
    """The webhook body is not valid UTF-8 JSON."""


class WebhookInvalidPayloadError(WebhookParseError):
    """The webhook body decoded, but does not have the expected shape."""


class WebhookMissingKeyError(WebhookParseError):
    """A required key is missing from the webhook body."""

    def __init__(self, message: str, *, key: str):
        super().__init__(message)
        self.key = key
