"""Tests for shopkit.sdk.client: executor, retry loop, pagination, telemetry."""

from __future__ import annotations

import base64
import json
from datetime import datetime, timezone

import httpx
import pytest
from pydantic import BaseModel

from shopkit.config import settings
from shopkit.sdk import (
    CancellationError,
    CancellationTokenSource,
    CountOptions,
    ListOptions,
    RateLimitError,
    ResponseDecodingError,
    ResponseError,
    ShopifyClient,
    TransportError,
)
from shopkit.services.request_context import get_request_id

BASE = "/admin/api/2024-01"
CALL_LIMIT = "X-Shopify-Shop-Api-Call-Limit"


class Shop(BaseModel):
    id: int
    name: str


class ShopEnvelope(BaseModel):
    shop: Shop


_SHOP_BODY = {"shop": {"id": 1, "name": "foo"}}


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------


class TestRequestConstruction:
    def test_token_auth_headers(self, make_client, replay):
        handler = replay((200, _SHOP_BODY))
        client = make_client(handler)
        client.get("shop.json")
        request = handler.requests[0]
        assert request.headers["X-Shopify-Access-Token"] == "abc123"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"] == settings.user_agent
        assert "Authorization" not in request.headers

    def test_follows_redirects(self, make_client, replay, sleeps):
        handler = replay(
            (303, None, {"Location": f"https://fooshop.myshopify.com{BASE}/shop.json"}),
            (200, _SHOP_BODY),
        )
        client = make_client(handler)
        shop = client.get("shops/current.json", ShopEnvelope)
        assert shop.shop.name == "foo"
        assert handler.count == 2
        assert handler.requests[1].url.path == f"{BASE}/shop.json"
        assert handler.requests[1].headers["X-Shopify-Access-Token"] == "abc123"
        assert sleeps.calls == []

    def test_private_app_basic_auth(self, make_client, replay):
        handler = replay((200, _SHOP_BODY))
        client = make_client(handler, token=None, api_key="key", password="pass")
        client.get("shop.json")
        request = handler.requests[0]
        expected = base64.b64encode(b"key:pass").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert "X-Shopify-Access-Token" not in request.headers

    def test_url_uses_versioned_prefix(self, make_client, replay):
        handler = replay((200, _SHOP_BODY))
        client = make_client(handler)
        client.get("/shop.json")
        url = handler.requests[0].url
        assert url.host == "fooshop.myshopify.com"
        assert url.scheme == "https"
        assert url.path == f"{BASE}/shop.json"

    def test_params_from_options_model(self, make_client, replay):
        handler = replay((200, {"collects": []}))
        client = make_client(handler)
        client.get("collects.json", params=ListOptions(limit=50, ids=[1, 2, 3]))
        params = handler.requests[0].url.params
        assert params["limit"] == "50"
        assert params["ids"] == "1,2,3"
        assert "page_info" not in params

    def test_params_from_mapping(self, make_client, replay):
        handler = replay((200, {}))
        client = make_client(handler)
        client.get("things.json", params={"fields": "id,name", "skip": None})
        params = handler.requests[0].url.params
        assert params["fields"] == "id,name"
        assert "skip" not in params

    def test_model_body_drops_unset_fields(self, make_client, replay):
        class Collect(BaseModel):
            id: int | None = None
            product_id: int | None = None
            collection_id: int | None = None

        handler = replay((201, {"collect": {"id": 1}}))
        client = make_client(handler)
        client.post("collects.json", {"collect": Collect(product_id=1, collection_id=2)})
        body = json.loads(handler.requests[0].content)
        assert body == {"collect": {"product_id": 1, "collection_id": 2}}
        assert handler.requests[0].method == "POST"

    def test_context_manager_closes(self, replay):
        transport = httpx.MockTransport(replay((200, _SHOP_BODY)))
        with ShopifyClient("fooshop", "t", _transport=transport) as client:
            client.get("shop.json")
        assert client._client.is_closed


# ---------------------------------------------------------------------------
# API version pinning
# ---------------------------------------------------------------------------


class TestVersionPinning:
    def test_unversioned_prefix_until_pinned(self, make_client, replay):
        handler = replay((200, _SHOP_BODY, {"X-Shopify-API-Version": "2024-04"}))
        client = make_client(handler, api_version="")
        client.get("shop.json")
        client.get("shop.json")
        assert handler.requests[0].url.path == "/admin/shop.json"
        assert handler.requests[1].url.path == "/admin/api/2024-04/shop.json"
        assert client.api_version == "2024-04"

    def test_explicit_version_not_overridden(self, make_client, replay):
        handler = replay((200, _SHOP_BODY, {"X-Shopify-API-Version": "2024-04"}))
        client = make_client(handler)
        client.get("shop.json")
        assert client.api_version == "2024-01"

    def test_error_response_does_not_pin(self, make_client, replay):
        handler = replay((404, {"errors": "Not Found"}, {"X-Shopify-API-Version": "2024-04"}))
        client = make_client(handler, api_version="")
        with pytest.raises(ResponseError):
            client.get("shop.json")
        assert client.path_prefix == "admin"


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecoding:
    def test_decodes_into_model(self, make_client, replay):
        client = make_client(replay((200, _SHOP_BODY)))
        result = client.get("shop.json", ShopEnvelope)
        assert isinstance(result, ShopEnvelope)
        assert result.shop.name == "foo"

    def test_raw_json_without_model(self, make_client, replay):
        client = make_client(replay((200, _SHOP_BODY)))
        assert client.get("shop.json") == _SHOP_BODY

    def test_empty_body_without_model(self, make_client, replay):
        handler = replay((200, None))
        client = make_client(handler)
        assert client.delete("collects/1.json") is None
        assert handler.requests[0].method == "DELETE"

    def test_empty_body_with_model(self, make_client, replay):
        client = make_client(replay((200, None)))
        with pytest.raises(ResponseDecodingError):
            client.get("shop.json", ShopEnvelope)

    def test_invalid_json(self, make_client, replay):
        client = make_client(replay((200, "{not json")))
        with pytest.raises(ResponseDecodingError) as exc_info:
            client.get("shop.json", ShopEnvelope)
        assert exc_info.value.status == 200
        assert exc_info.value.body == b"{not json"

    def test_validation_failure(self, make_client, replay):
        client = make_client(replay((200, {"shop": {"id": "abc"}})))
        with pytest.raises(ResponseDecodingError):
            client.get("shop.json", ShopEnvelope)

    def test_decode_errors_are_not_retried(self, make_client, replay, sleeps):
        handler = replay((200, "<html>"))
        client = make_client(handler)
        with pytest.raises(ResponseDecodingError):
            client.get("shop.json", ShopEnvelope)
        assert handler.count == 1
        assert sleeps.calls == []


# ---------------------------------------------------------------------------
# Count & pagination
# ---------------------------------------------------------------------------


class TestCountAndPagination:
    def test_count(self, make_client, replay):
        handler = replay((200, {"count": 7}))
        client = make_client(handler)
        options = CountOptions(created_at_min=datetime(2016, 1, 1, tzinfo=timezone.utc))
        assert client.count("collects/count.json", options) == 7
        params = handler.requests[0].url.params
        assert params["created_at_min"] == "2016-01-01T00:00:00+00:00"

    def test_list_with_pagination(self, make_client, replay):
        link = (
            '<https://fooshop.myshopify.com/admin/api/2024-01/collects.json'
            '?page_info=abc&limit=2>; rel="next", '
            '<https://fooshop.myshopify.com/admin/api/2024-01/collects.json'
            '?page_info=xyz&limit=2>; rel="previous"'
        )
        client = make_client(replay((200, {"collects": [{"id": 1}]}, {"Link": link})))
        result, pagination = client.list_with_pagination("collects.json", None)
        assert result == {"collects": [{"id": 1}]}
        assert pagination.next_page_options == ListOptions(page_info="abc", limit=2)
        assert pagination.previous_page_options == ListOptions(page_info="xyz", limit=2)

    def test_list_without_link_header(self, make_client, replay):
        client = make_client(replay((200, {"collects": []})))
        _, pagination = client.list_with_pagination("collects.json", None)
        assert pagination.next_page_options is None
        assert pagination.previous_page_options is None

    def test_malformed_link_header_raises(self, make_client, replay):
        client = make_client(replay((200, {"collects": []}, {"Link": "garbage"})))
        with pytest.raises(ResponseDecodingError, match="could not extract pagination link header"):
            client.list_with_pagination("collects.json", None)


# ---------------------------------------------------------------------------
# Retry loop
# ---------------------------------------------------------------------------


class TestRetries:
    def test_429_waits_for_retry_after(self, make_client, replay, sleeps):
        handler = replay(
            (429, {"errors": "Exceeded 2 calls per second"}, {"Retry-After": "2.0"}),
            (200, _SHOP_BODY),
        )
        client = make_client(handler)
        result = client.get("shop.json", ShopEnvelope)
        assert result.shop.id == 1
        assert handler.count == 2
        assert sleeps.calls == [2.0]

    def test_429_without_hint_backs_off(self, make_client, replay, sleeps):
        handler = replay((429, None), (200, _SHOP_BODY))
        client = make_client(handler)
        client.get("shop.json")
        assert sleeps.calls == [1.0]

    def test_5xx_backs_off_exponentially(self, make_client, replay, sleeps):
        handler = replay((500, None), (502, None), (200, _SHOP_BODY))
        client = make_client(handler)
        client.get("shop.json")
        assert handler.count == 3
        assert sleeps.calls == [1.0, 2.0]

    def test_5xx_exhausts_budget(self, make_client, replay, sleeps):
        handler = replay((503, None))
        client = make_client(handler)
        with pytest.raises(ResponseError) as exc_info:
            client.get("shop.json")
        assert exc_info.value.status == 503
        assert str(exc_info.value) == "Unknown Error"
        assert handler.count == 3
        assert sleeps.calls == [1.0, 2.0]

    def test_429_exhausts_budget(self, make_client, replay, sleeps):
        handler = replay((429, {"errors": "Too many"}, {"Retry-After": "3"}))
        client = make_client(handler, max_retries=2)
        with pytest.raises(RateLimitError) as exc_info:
            client.get("shop.json")
        assert exc_info.value.retry_after == 3
        assert handler.count == 2
        assert client.rate_limits.retry_after_seconds == 3.0

    def test_4xx_not_retried(self, make_client, replay, sleeps):
        handler = replay((404, {"errors": "Not Found"}))
        client = make_client(handler)
        with pytest.raises(ResponseError) as exc_info:
            client.get("shop.json")
        assert exc_info.value.status == 404
        assert str(exc_info.value) == "Not Found"
        assert handler.count == 1
        assert sleeps.calls == []

    def test_single_attempt_budget(self, make_client, replay, sleeps):
        handler = replay((429, None, {"Retry-After": "1"}))
        client = make_client(handler, max_retries=1)
        with pytest.raises(RateLimitError):
            client.get("shop.json")
        assert handler.count == 1
        assert sleeps.calls == []

    def test_zero_budget_still_attempts_once(self, make_client, replay):
        handler = replay((200, _SHOP_BODY))
        client = make_client(handler, max_retries=0)
        client.get("shop.json")
        assert handler.count == 1

    def test_transport_error_not_retried(self, make_client):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(TransportError) as exc_info:
            client.get("shop.json")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(calls) == 1

    def test_retries_logged_as_warnings(self, make_client, replay, caplog):
        client = make_client(replay((500, None), (200, _SHOP_BODY)))
        with caplog.at_level("WARNING", logger="shopkit.sdk.retry"):
            client.get("shop.json")
        assert any("retrying in 1.00s" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestCancellation:
    def test_cancelled_before_first_attempt(self, make_client, replay):
        handler = replay((200, _SHOP_BODY))
        client = make_client(handler)
        source = CancellationTokenSource()
        source.cancel(reason="shutdown")
        with pytest.raises(CancellationError, match="shutdown"):
            client.get("shop.json", cancellation_token=source.token)
        assert handler.count == 0

    def test_cancelled_during_backoff(self, make_client, replay):
        handler = replay((429, None, {"Retry-After": "5"}), (200, _SHOP_BODY))
        source = CancellationTokenSource()
        client = make_client(handler, sleep=lambda seconds: source.cancel())
        with pytest.raises(CancellationError):
            client.get("shop.json", cancellation_token=source.token)
        assert handler.count == 1

    def test_deadline_interrupts_real_wait(self, make_client, replay):
        handler = replay((429, None, {"Retry-After": "30"}))
        client = make_client(handler, sleep=None)
        source = CancellationTokenSource(timeout=0.05)
        with pytest.raises(CancellationError, match="deadline exceeded"):
            client.get("shop.json", cancellation_token=source.token)
        assert handler.count == 1


# ---------------------------------------------------------------------------
# Rate-limit telemetry & call ids
# ---------------------------------------------------------------------------


class TestTelemetry:
    def test_call_limit_tracked_on_success(self, make_client, replay):
        client = make_client(replay((200, _SHOP_BODY, {CALL_LIMIT: "2/40"})))
        client.get("shop.json")
        assert client.rate_limits.request_count == 2
        assert client.rate_limits.bucket_size == 40

    def test_call_limit_tracked_on_error(self, make_client, replay):
        client = make_client(replay((422, {"errors": {"title": ["is taken"]}}, {CALL_LIMIT: "39/40"})))
        with pytest.raises(ResponseError):
            client.get("shop.json")
        assert client.rate_limits.request_count == 39

    def test_call_limit_kept_without_header(self, make_client, replay):
        client = make_client(replay((200, _SHOP_BODY, {CALL_LIMIT: "5/40"}), (200, _SHOP_BODY)))
        client.get("shop.json")
        client.get("shop.json")
        assert client.rate_limits.request_count == 5

    def test_call_id_shared_across_retries(self, make_client):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(get_request_id())
            if len(seen) == 1:
                return httpx.Response(503)
            return httpx.Response(200, json=_SHOP_BODY)

        client = make_client(handler)
        client.get("shop.json")
        client.get("shop.json")
        assert seen[0] and seen[0] == seen[1]
        assert seen[2] != seen[0]
        assert get_request_id() == ""
