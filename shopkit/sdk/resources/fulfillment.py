"""Fulfillments, top-level or nested under an order."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource


class FulfillmentTrackingInfo(BaseModel):
    company: str | None = None
    number: str | None = None
    url: str | None = None


class Receipt(BaseModel):
    testcase: bool | None = None
    authorization: str | None = None


class FulfillmentOrderLineItemQuantity(BaseModel):
    id: int
    quantity: int


class LineItemByFulfillmentOrder(BaseModel):
    fulfillment_order_id: int | None = None
    fulfillment_order_line_items: list[FulfillmentOrderLineItemQuantity] | None = None


class Fulfillment(BaseModel):
    id: int | None = None
    order_id: int | None = None
    location_id: int | None = None
    status: str | None = None
    created_at: datetime | None = None
    service: str | None = None
    updated_at: datetime | None = None
    tracking_company: str | None = None
    shipment_status: str | None = None
    tracking_info: FulfillmentTrackingInfo | None = None
    tracking_number: str | None = None
    tracking_numbers: list[str] | None = None
    tracking_url: str | None = None
    tracking_urls: list[str] | None = None
    receipt: Receipt | None = None
    line_items: list[dict[str, Any]] | None = None
    line_items_by_fulfillment_order: list[LineItemByFulfillmentOrder] | None = None
    notify_customer: bool = False


class FulfillmentResource(Resource[Fulfillment]):
    """``fulfillments`` or ``<resource>/<id>/fulfillments`` depending on owner."""

    model = Fulfillment
    base_path = "fulfillments"
    singular = "fulfillment"
    plural = "fulfillments"

    def _action(self, fulfillment_id: int, action: str, **kwargs: Any) -> Fulfillment | None:
        result = self._client.post(
            self._path(fulfillment_id, action), None, self._one(), **kwargs
        )
        return result.fulfillment

    def complete(self, fulfillment_id: int, **kwargs: Any) -> Fulfillment | None:
        return self._action(fulfillment_id, "complete", **kwargs)

    def transition(self, fulfillment_id: int, **kwargs: Any) -> Fulfillment | None:
        """Move a fulfillment back to ``open``."""
        return self._action(fulfillment_id, "open", **kwargs)

    def cancel(self, fulfillment_id: int, **kwargs: Any) -> Fulfillment | None:
        return self._action(fulfillment_id, "cancel", **kwargs)
