"""Exception hierarchy and HTTP error classification for the shopkit SDK."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

import httpx

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown Error"


class ShopifyError(Exception):
    """Base exception for all shopkit errors."""


class ResponseError(ShopifyError):
    """Non-2xx response (or GraphQL ``errors``) with one or more messages.

    ``errors`` keeps the order messages were received in; ``str()`` joins
    them sorted so the text is stable whatever order the server used.
    """

    def __init__(
        self,
        status: int,
        message: str = "",
        errors: list[str] | None = None,
    ) -> None:
        self.status = status
        self.message = message
        self.errors: list[str] = list(errors or [])
        super().__init__(status, message)

    def __str__(self) -> str:
        if self.message:
            return self.message
        joined = ", ".join(sorted(self.errors))
        return joined or UNKNOWN_ERROR

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self.status}, "
            f"message={self.message!r}, errors={self.errors!r})"
        )


class RateLimitError(ResponseError):
    """Raised on 429 responses and throttled GraphQL queries."""

    def __init__(
        self,
        status: int,
        message: str = "",
        errors: list[str] | None = None,
        retry_after: int = 0,
    ) -> None:
        super().__init__(status, message, errors)
        self.retry_after = retry_after

    def __repr__(self) -> str:
        return (
            f"RateLimitError(status={self.status}, message={self.message!r}, "
            f"retry_after={self.retry_after})"
        )


class ResponseDecodingError(ShopifyError):
    """A response body or header could not be decoded."""

    def __init__(self, message: str, body: bytes = b"", status: int = 0) -> None:
        self.message = message
        self.body = body
        self.status = status
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class TransportError(ShopifyError):
    """The request never produced a response (connection error, timeout)."""


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _flatten_errors(errors: Any) -> tuple[str, list[str]]:
    """Return ``(message, messages)`` for the three ``errors`` body shapes."""
    if isinstance(errors, str):
        return errors, []
    if isinstance(errors, list):
        return "", [str(e) for e in errors]
    if isinstance(errors, dict):
        messages: list[str] = []
        for field, value in errors.items():
            if isinstance(value, list):
                messages.extend(f"{field}: {elem}" for elem in value)
            else:
                messages.append(f"{field}: {value}")
        return "", messages
    return "", []


def _parse_retry_after(headers: httpx.Headers) -> int:
    raw = headers.get("retry-after")
    if not raw:
        return 0
    try:
        return int(float(raw))
    except ValueError:
        logger.debug("Ignoring unparsable Retry-After header %r", raw)
        return 0


def _wrap_specific_error(
    response: httpx.Response, error: ResponseError
) -> ResponseError:
    if error.status == HTTPStatus.TOO_MANY_REQUESTS:
        return RateLimitError(
            error.status,
            error.message,
            error.errors,
            retry_after=_parse_retry_after(response.headers),
        )
    if error.status == HTTPStatus.NOT_ACCEPTABLE:
        error.message = HTTPStatus.NOT_ACCEPTABLE.phrase
    return error


def check_response_error(response: httpx.Response) -> ShopifyError | None:
    """Classify *response*; return *None* for 2xx.

    5xx responses whose body is empty or not JSON become a bare
    :class:`ResponseError` (rendered as ``"Unknown Error"``); a 4xx body that
    is not a JSON object is a :class:`ResponseDecodingError`.
    """
    status = response.status_code
    if 200 <= status < 300:
        return None

    payload: Any = {}
    body = response.content
    if body:
        try:
            payload = response.json()
        except ValueError as exc:
            if status < 500:
                return ResponseDecodingError(str(exc), body=body, status=status)
            payload = {}
        if not isinstance(payload, dict):
            if status < 500:
                return ResponseDecodingError(
                    "error body is not a JSON object", body=body, status=status
                )
            payload = {}

    top_level = payload.get("error")
    error = ResponseError(
        status, message=top_level if isinstance(top_level, str) else ""
    )

    errors = payload.get("errors")
    if errors is not None:
        message, messages = _flatten_errors(errors)
        if message:
            error.message = message
        error.errors.extend(messages)

    return _wrap_specific_error(response, error)
