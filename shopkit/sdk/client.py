"""Synchronous HTTP client for the Admin REST and GraphQL APIs."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping

import httpx
from pydantic import BaseModel

from shopkit.config import settings
from shopkit.sdk.cancellation import CancellationToken
from shopkit.sdk.decoding import decode_as, to_json_payload
from shopkit.sdk.exceptions import (
    RateLimitError,
    ResponseDecodingError,
    TransportError,
    check_response_error,
)
from shopkit.sdk.graphql import GraphQLService
from shopkit.sdk.models import RateLimits
from shopkit.sdk.pagination import LINK_HEADER, Pagination, encode_options, extract_pagination
from shopkit.sdk.resources import (
    AbandonedCheckoutResource,
    AssignedFulfillmentOrderResource,
    CarrierServiceResource,
    CollectResource,
    FulfillmentEventResource,
    FulfillmentRequestResource,
    FulfillmentResource,
    FulfillmentServiceResource,
    GiftCardResource,
    InventoryLevelResource,
    MetafieldResource,
    OrderRiskResource,
    PaymentsTransactionResource,
    PayoutResource,
)
from shopkit.sdk.retry import RetryPolicy
from shopkit.sdk.util import fulfillment_path_prefix, metafield_path_prefix, shop_base_url
from shopkit.services.request_context import call_scope

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"
API_VERSION_HEADER = "x-shopify-api-version"

Params = BaseModel | Mapping[str, Any] | None


class _Count(BaseModel):
    count: int


class ShopifyClient:
    """Client for one shop (backed by ``httpx.Client``).

    Authenticates with an access token, or with HTTP basic auth when only
    ``api_key``/``password`` are given (private apps). Every call runs
    through a bounded retry loop: throttled (429) responses wait for the
    ``Retry-After`` hint, 5xx responses back off exponentially, anything
    else is raised at once. Unset options fall back to :data:`settings`.
    """

    def __init__(
        self,
        shop_name: str,
        token: str | None = None,
        *,
        api_key: str | None = None,
        password: str | None = None,
        api_version: str | None = None,
        max_retries: int | None = None,
        timeout: float | None = None,
        retry_base_delay: float | None = None,
        retry_max_delay: float | None = None,
        user_agent: str | None = None,
        sleep: Callable[[float], None] | None = None,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.shop_name = shop_name
        self.base_url = shop_base_url(shop_name)
        self.api_version = api_version if api_version is not None else settings.api_version

        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent or settings.user_agent,
        }
        if token:
            headers[ACCESS_TOKEN_HEADER] = token
        kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "headers": headers,
            "timeout": timeout if timeout is not None else settings.timeout,
            "follow_redirects": True,
        }
        if not token and password:
            kwargs["auth"] = httpx.BasicAuth(api_key or "", password)
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.Client(**kwargs)

        self.retry_policy = RetryPolicy(
            max_retries=max_retries if max_retries is not None else settings.max_retries,
            base_delay=(
                retry_base_delay if retry_base_delay is not None else settings.retry_base_delay
            ),
            max_delay=(
                retry_max_delay if retry_max_delay is not None else settings.retry_max_delay
            ),
        )
        self.rate_limits = RateLimits()
        self._sleep = sleep

        self.graphql = GraphQLService(self)

        self.abandoned_checkouts = AbandonedCheckoutResource(self)
        self.assigned_fulfillment_orders = AssignedFulfillmentOrderResource(self)
        self.carrier_services = CarrierServiceResource(self)
        self.collects = CollectResource(self)
        self.fulfillment_requests = FulfillmentRequestResource(self)
        self.fulfillment_services = FulfillmentServiceResource(self)
        self.fulfillments = FulfillmentResource(self)
        self.gift_cards = GiftCardResource(self)
        self.inventory_levels = InventoryLevelResource(self)
        self.metafields = MetafieldResource(self)
        self.payments_transactions = PaymentsTransactionResource(self)
        self.payouts = PayoutResource(self)

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> ShopifyClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- nested resources ----------------------------------------------------

    def order_risks(self, order_id: int) -> OrderRiskResource:
        return OrderRiskResource(self, order_id)

    def fulfillment_events(self, order_id: int, fulfillment_id: int) -> FulfillmentEventResource:
        return FulfillmentEventResource(self, order_id, fulfillment_id)

    def metafields_for(self, resource: str, resource_id: int) -> MetafieldResource:
        """Metafields owned by another resource, e.g. ``("products", 1)``."""
        return MetafieldResource(self, metafield_path_prefix(resource, resource_id))

    def fulfillments_for(self, resource: str, resource_id: int) -> FulfillmentResource:
        return FulfillmentResource(self, fulfillment_path_prefix(resource, resource_id))

    # -- internal ------------------------------------------------------------

    @property
    def path_prefix(self) -> str:
        if self.api_version:
            return f"admin/api/{self.api_version}"
        return "admin"

    def _url(self, path: str) -> str:
        return f"/{self.path_prefix}/{path.lstrip('/')}"

    def _pin_api_version(self, response: httpx.Response) -> None:
        if self.api_version:
            return
        version = response.headers.get(API_VERSION_HEADER)
        if version:
            self.api_version = version
            logger.info("api_version not set, now using %s", version)

    def _wait(self, seconds: float, token: CancellationToken | None) -> None:
        if self._sleep is not None:
            if token is not None:
                token.raise_if_cancelled()
            self._sleep(seconds)
        elif token is not None:
            token.sleep(seconds)
        else:
            time.sleep(seconds)

    def _decode(self, response: httpx.Response, model: Any) -> Any:
        body = response.content
        if not body:
            if model is None:
                return None
            raise ResponseDecodingError(
                "empty response body", body=body, status=response.status_code
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ResponseDecodingError(
                str(exc), body=body, status=response.status_code
            ) from exc
        if model is None:
            return payload
        return decode_as(model, payload, body=body, status=response.status_code)

    def _execute(
        self,
        method: str,
        path: str,
        payload: Any,
        params: dict[str, str] | None,
        model: Any,
        token: CancellationToken | None,
    ) -> tuple[Any, httpx.Headers]:
        """One round trip: send, track, classify, decode."""
        if token is not None:
            token.raise_if_cancelled()

        url = self._url(path)
        kwargs: dict[str, Any] = {}
        if payload is not None:
            kwargs["json"] = payload
        if params:
            kwargs["params"] = params

        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url}: {exc}") from exc
        logger.debug("%s %s -> %d", method, url, response.status_code)

        try:
            error = check_response_error(response)
            if error is not None:
                if isinstance(error, RateLimitError):
                    self.rate_limits.update_retry_after(float(error.retry_after))
                raise error
            self._pin_api_version(response)
            return self._decode(response, model), response.headers
        finally:
            self.rate_limits.update_from_headers(response.headers)

    def _send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        model: Any = None,
        params: Params = None,
        token: CancellationToken | None = None,
        max_attempts: int | None = None,
    ) -> tuple[Any, httpx.Headers, int]:
        """Run one request through the retry loop.

        Returns ``(decoded, headers, attempts_used)``.
        """
        payload = to_json_payload(body) if body is not None else None
        query = encode_options(params) or None

        (decoded, headers), attempts = self.retry_policy.run(
            lambda: self._execute(method, path, payload, query, model, token),
            sleep=lambda seconds: self._wait(seconds, token),
            max_attempts=max_attempts,
        )
        return decoded, headers, attempts

    # -- public methods ------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        model: Any = None,
        params: Params = None,
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> Any:
        """Perform one logical call; *model* is any pydantic-validatable type.

        Without *model* the parsed JSON (or *None* for an empty body) is
        returned as-is.
        """
        with call_scope():
            decoded, _, _ = self._send(
                method.upper(),
                path,
                body=body,
                model=model,
                params=params,
                token=cancellation_token,
            )
        return decoded

    def get(
        self,
        path: str,
        model: Any = None,
        params: Params = None,
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> Any:
        return self.request(
            "GET", path, model=model, params=params,
            cancellation_token=cancellation_token,
        )

    def post(
        self,
        path: str,
        body: Any = None,
        model: Any = None,
        *,
        params: Params = None,
        cancellation_token: CancellationToken | None = None,
    ) -> Any:
        return self.request(
            "POST", path, body=body, model=model, params=params,
            cancellation_token=cancellation_token,
        )

    def put(
        self,
        path: str,
        body: Any = None,
        model: Any = None,
        *,
        params: Params = None,
        cancellation_token: CancellationToken | None = None,
    ) -> Any:
        return self.request(
            "PUT", path, body=body, model=model, params=params,
            cancellation_token=cancellation_token,
        )

    def delete(
        self,
        path: str,
        params: Params = None,
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> None:
        self.request(
            "DELETE", path, params=params, cancellation_token=cancellation_token,
        )

    def count(
        self,
        path: str,
        params: Params = None,
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> int:
        """GET a ``count.json`` endpoint and return ``{"count": N}``'s value."""
        result = self.get(
            path, _Count, params, cancellation_token=cancellation_token,
        )
        return result.count

    def list_with_pagination(
        self,
        path: str,
        model: Any,
        params: Params = None,
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> tuple[Any, Pagination]:
        """GET a list and parse the ``Link`` header into page cursors.

        A malformed ``Link`` header raises; no partial result is returned.
        """
        with call_scope():
            decoded, headers, _ = self._send(
                "GET", path, model=model, params=params, token=cancellation_token,
            )
        return decoded, extract_pagination(headers.get(LINK_HEADER))

    def __repr__(self) -> str:
        return f"ShopifyClient(shop={self.shop_name!r}, api_version={self.api_version!r})"
