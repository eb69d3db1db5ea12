from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from shopkit.sdk import ShopifyClient

SHOP = "fooshop"
API_VERSION = "2024-01"
BASE = f"/admin/api/{API_VERSION}"


def make_response(
    status: int,
    body: Any = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a response; *body* may be JSON data, raw str/bytes, or None."""
    if body is None:
        return httpx.Response(status, headers=headers)
    if isinstance(body, (str, bytes)):
        return httpx.Response(status, content=body, headers=headers)
    return httpx.Response(status, json=body, headers=headers)


class Replay:
    """Mock handler answering with canned responses in order.

    Each entry is ``(status, body)`` or ``(status, body, headers)``; the last
    entry repeats once the list runs out.
    """

    def __init__(self, *entries: tuple) -> None:
        self.entries = list(entries)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        entry = self.entries[min(len(self.requests), len(self.entries)) - 1]
        return make_response(*entry)

    @property
    def count(self) -> int:
        return len(self.requests)


class Router:
    """Mock handler keyed by ``(method, path)``; unknown routes get a 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int, body: Any = None, headers=None) -> None:
        self.routes[(method, f"{BASE}/{path}")] = (status, body, headers)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        entry = self.routes.get((request.method, request.url.path))
        if entry is None:
            return make_response(404, {"errors": "Not Found"})
        return make_response(*entry)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def make_client(sleeps):
    """Factory for clients wired to a mock handler; closed after the test."""
    clients: list[ShopifyClient] = []

    def factory(handler, token: str | None = "abc123", **kwargs) -> ShopifyClient:
        kwargs.setdefault("api_version", API_VERSION)
        kwargs.setdefault("max_retries", 3)
        kwargs.setdefault("retry_base_delay", 1.0)
        kwargs.setdefault("retry_max_delay", 32.0)
        kwargs.setdefault("sleep", sleeps)
        client = ShopifyClient(
            SHOP, token, _transport=httpx.MockTransport(handler), **kwargs
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def replay() -> type[Replay]:
    return Replay
