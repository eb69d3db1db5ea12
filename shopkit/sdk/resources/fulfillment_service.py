"""Fulfillment services (third-party warehouses)."""

from __future__ import annotations

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource


class FulfillmentServiceData(BaseModel):
    id: int | None = None
    name: str | None = None
    email: str | None = None
    service_name: str | None = None
    handle: str | None = None
    fulfillment_orders_opt_in: bool | None = None
    include_pending_stock: bool | None = None
    provider_id: int | None = None
    location_id: int | None = None
    callback_url: str | None = None
    tracking_support: bool | None = None
    inventory_management: bool | None = None
    admin_graphql_api_id: str | None = None
    permits_sku_sharing: bool | None = None
    requires_shipping_method: bool | None = None


class FulfillmentServiceOptions(BaseModel):
    # "current_client" or "all"
    scope: str | None = None


class FulfillmentServiceResource(Resource[FulfillmentServiceData]):
    model = FulfillmentServiceData
    base_path = "fulfillment_services"
    singular = "fulfillment_service"
    plural = "fulfillment_services"
