"""Abandoned checkouts (read-only)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from shopkit.sdk.resources.base import ListableResource


class SmsMarketingConsent(BaseModel):
    state: str | None = None
    opt_in_level: str | None = None
    consent_updated_at: datetime | None = None
    consent_collected_from: str | None = None


class AbandonedCheckout(BaseModel):
    id: int | None = None
    token: str | None = None
    cart_token: str | None = None
    email: str | None = None
    gateway: str | None = None
    buyer_accepts_marketing: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    landing_site: str | None = None
    note: str | None = None
    note_attributes: list[dict[str, Any]] | None = None
    referring_site: str | None = None
    shipping_lines: list[dict[str, Any]] | None = None
    taxes_included: bool | None = None
    total_weight: int | None = None
    currency: str | None = None
    completed_at: datetime | None = None
    closed_at: datetime | None = None
    user_id: int | None = None
    source_identifier: str | None = None
    source_url: str | None = None
    device_id: int | None = None
    phone: str | None = None
    customer_locale: str | None = None
    name: str | None = None
    source: str | None = None
    abandoned_checkout_url: str | None = None
    discount_codes: list[dict[str, Any]] | None = None
    tax_lines: list[dict[str, Any]] | None = None
    source_name: str | None = None
    presentment_currency: str | None = None
    buyer_accepts_sms_marketing: bool | None = None
    sms_marketing_phone: str | None = None
    total_discounts: Decimal | None = None
    total_line_items_price: Decimal | None = None
    total_price: Decimal | None = None
    subtotal_price: Decimal | None = None
    total_duties: str | None = None
    billing_address: dict[str, Any] | None = None
    shipping_address: dict[str, Any] | None = None
    customer: dict[str, Any] | None = None
    sms_marketing_consent: SmsMarketingConsent | None = None
    admin_graphql_api_id: str | None = None
    default_address: dict[str, Any] | None = None


class AbandonedCheckoutResource(ListableResource[AbandonedCheckout]):
    model = AbandonedCheckout
    base_path = "checkouts"
    singular = "checkout"
    plural = "checkouts"
