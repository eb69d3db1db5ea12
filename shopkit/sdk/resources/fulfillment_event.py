"""Tracking events of one fulfillment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource

if TYPE_CHECKING:
    from shopkit.sdk.client import ShopifyClient


class FulfillmentEvent(BaseModel):
    id: int | None = None
    address1: str | None = None
    city: str | None = None
    country: str | None = None
    created_at: str | None = None
    estimated_delivery_at: str | None = None
    fulfillment_id: int | None = None
    happened_at: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    message: str | None = None
    order_id: int | None = None
    province: str | None = None
    shop_id: int | None = None
    status: str | None = None
    updated_at: str | None = None
    zip: str | None = None


class FulfillmentEventResource(Resource[FulfillmentEvent]):
    """Events at ``orders/<order_id>/fulfillments/<fulfillment_id>/events``.

    Requests wrap the body as ``{"event": ...}`` while responses use
    ``{"fulfillment_event": ...}``.
    """

    model = FulfillmentEvent
    singular = "fulfillment_event"
    plural = "fulfillment_events"
    request_key = "event"

    def __init__(self, client: ShopifyClient, order_id: int, fulfillment_id: int) -> None:
        super().__init__(client, f"orders/{order_id}/fulfillments/{fulfillment_id}/events")
        self.order_id = order_id
        self.fulfillment_id = fulfillment_id
