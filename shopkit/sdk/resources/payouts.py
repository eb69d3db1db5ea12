"""Payments payouts (read-only)."""

from __future__ import annotations

import datetime as dt
import enum
from decimal import Decimal

from pydantic import BaseModel

from shopkit.sdk.resources.base import ReadOnlyResource
from shopkit.sdk.util import OnlyDate


class PayoutStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_TRANSIT = "in_transit"
    PAID = "paid"
    FAILED = "failed"
    CANCELLED = "canceled"


class Payout(BaseModel):
    id: int | None = None
    date: OnlyDate = None
    currency: str | None = None
    amount: Decimal | None = None
    status: PayoutStatus | None = None


class PayoutsListOptions(BaseModel):
    page_info: str | None = None
    limit: int | None = None
    fields: str | None = None
    last_id: int | None = None
    since_id: int | None = None
    status: PayoutStatus | None = None
    date_min: dt.date | None = None
    date_max: dt.date | None = None
    date: dt.date | None = None


class PayoutResource(ReadOnlyResource[Payout]):
    model = Payout
    base_path = "shopify_payments/payouts"
    singular = "payout"
    plural = "payouts"
