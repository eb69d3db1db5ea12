"""Carrier services (third-party shipping rate providers)."""

from __future__ import annotations

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource


class CarrierService(BaseModel):
    id: int | None = None
    name: str | None = None
    active: bool | None = None
    callback_url: str | None = None
    carrier_service_type: str | None = None
    format: str | None = None
    service_discovery: bool | None = None
    admin_graphql_api_id: str | None = None


class CarrierServiceResource(Resource[CarrierService]):
    model = CarrierService
    base_path = "carrier_services"
    singular = "carrier_service"
    plural = "carrier_services"
