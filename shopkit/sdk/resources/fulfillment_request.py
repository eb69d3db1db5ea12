"""Fulfillment requests sent to, and answered by, fulfillment services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from shopkit.sdk.client import ShopifyClient


class FulfillmentOrderDestination(BaseModel):
    id: int | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    company: str | None = None
    country: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    province: str | None = None
    zip: str | None = None


class FulfillmentOrderLineItem(BaseModel):
    id: int | None = None
    shop_id: int | None = None
    fulfillment_order_id: int | None = None
    line_item_id: int | None = None
    inventory_item_id: int | None = None
    quantity: int | None = None
    fulfillable_quantity: int | None = None
    variant_id: int | None = None


class FulfillmentOrder(BaseModel):
    id: int | None = None
    shop_id: int | None = None
    order_id: int | None = None
    assigned_location_id: int | None = None
    request_status: str | None = None
    status: str | None = None
    supported_actions: list[str] = Field(default_factory=list)
    destination: FulfillmentOrderDestination | None = None
    line_items: list[FulfillmentOrderLineItem] = Field(default_factory=list)


class FulfillmentRequestLineItem(BaseModel):
    fulfillment_order_line_item_id: int | None = None
    message: str | None = None


class FulfillmentRequest(BaseModel):
    message: str | None = None
    fulfillment_order_line_items: list[FulfillmentOrderLineItem] | None = None
    reason: str | None = None
    line_items: list[FulfillmentRequestLineItem] | None = None


class FulfillmentRequestResult(BaseModel):
    fulfillment_order: FulfillmentOrder | None = None
    original_fulfillment_order: FulfillmentOrder | None = None
    submitted_fulfillment_order: FulfillmentOrder | None = None


class FulfillmentRequestResource:
    """Actions on ``fulfillment_orders/<id>/fulfillment_request``."""

    base_path = "fulfillment_orders"

    def __init__(self, client: ShopifyClient) -> None:
        self._client = client

    def _post(
        self, fulfillment_order_id: int, action: str, request: FulfillmentRequest, **kwargs: Any
    ) -> FulfillmentRequestResult:
        path = f"{self.base_path}/{fulfillment_order_id}/fulfillment_request{action}.json"
        return self._client.post(
            path, {"fulfillment_request": request}, FulfillmentRequestResult, **kwargs
        )

    def send(
        self, fulfillment_order_id: int, request: FulfillmentRequest, **kwargs: Any
    ) -> FulfillmentOrder | None:
        """Request fulfillment; returns the original fulfillment order."""
        return self._post(fulfillment_order_id, "", request, **kwargs).original_fulfillment_order

    def accept(
        self, fulfillment_order_id: int, request: FulfillmentRequest, **kwargs: Any
    ) -> FulfillmentOrder | None:
        return self._post(fulfillment_order_id, "/accept", request, **kwargs).fulfillment_order

    def reject(
        self, fulfillment_order_id: int, request: FulfillmentRequest, **kwargs: Any
    ) -> FulfillmentOrder | None:
        return self._post(fulfillment_order_id, "/reject", request, **kwargs).fulfillment_order
