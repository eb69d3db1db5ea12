"""Fulfillment orders assigned to the calling app's locations."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shopkit.sdk.resources.base import ListableResource
from shopkit.sdk.resources.fulfillment_request import (
    FulfillmentOrderDestination,
    FulfillmentOrderLineItem,
)


class AssignedFulfillmentOrder(BaseModel):
    id: int | None = None
    assigned_location_id: int | None = None
    destination: FulfillmentOrderDestination | None = None
    line_items: list[FulfillmentOrderLineItem] = Field(default_factory=list)
    order_id: int | None = None
    request_status: str | None = None
    shop_id: int | None = None
    status: str | None = None


class AssignedFulfillmentOrderOptions(BaseModel):
    # e.g. "cancellation_requested", "fulfillment_requested"
    assignment_status: str | None = None
    location_ids: list[int] | None = None


class AssignedFulfillmentOrderResource(ListableResource[AssignedFulfillmentOrder]):
    model = AssignedFulfillmentOrder
    base_path = "assigned_fulfillment_orders"
    singular = "fulfillment_order"
    plural = "fulfillment_orders"
