"""Payments balance transactions (read-only)."""

from __future__ import annotations

import enum
from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from shopkit.sdk.resources.base import ReadOnlyResource
from shopkit.sdk.resources.payouts import PayoutStatus
from shopkit.sdk.util import OnlyDate


class PaymentsTransactionType(str, enum.Enum):
    CHARGE = "charge"
    REFUND = "refund"
    DISPUTE = "dispute"
    RESERVE = "reserve"
    ADJUSTMENT = "adjustment"
    CREDIT = "credit"
    DEBIT = "debit"
    PAYOUT = "payout"
    PAYOUT_FAILURE = "payout_failure"
    PAYOUT_CANCELLATION = "payout_cancellation"


class PaymentsTransaction(BaseModel):
    id: int | None = None
    type: PaymentsTransactionType | None = None
    test: bool | None = None
    payout_id: int | None = None
    payout_status: PayoutStatus | None = None
    currency: str | None = None
    amount: Decimal | None = None
    fee: Decimal | None = None
    net: Decimal | None = None
    source_id: int | None = None
    source_type: str | None = None
    source_order_transaction_id: int | None = None
    source_order_id: int | None = None
    processed_at: OnlyDate = None


class PaymentsTransactionsListOptions(BaseModel):
    page_info: str | None = None
    limit: int | None = None
    fields: str | None = None
    last_id: int | None = None
    since_id: int | None = None
    payout_id: int | None = None
    payout_status: PayoutStatus | None = None
    date_min: date | None = None
    date_max: date | None = None
    processed_at: date | None = None


class PaymentsTransactionResource(ReadOnlyResource[PaymentsTransaction]):
    model = PaymentsTransaction
    base_path = "shopify_payments/balance/transactions"
    singular = "transaction"
    plural = "transactions"
