"""Fraud risk assessments of an order."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource

if TYPE_CHECKING:
    from shopkit.sdk.client import ShopifyClient


class OrderRiskRecommendation(str, enum.Enum):
    CANCEL = "cancel"
    INVESTIGATE = "investigate"
    ACCEPT = "accept"


class OrderRisk(BaseModel):
    id: int | None = None
    checkout_id: int | None = None
    order_id: int | None = None
    cause_cancel: bool | None = None
    display: bool | None = None
    merchant_message: str | None = None
    message: str | None = None
    score: str | None = None
    source: str | None = None
    recommendation: OrderRiskRecommendation | None = None


class OrderRiskResource(Resource[OrderRisk]):
    """Risks at ``orders/<order_id>/risks``."""

    model = OrderRisk
    singular = "risk"
    plural = "risks"

    def __init__(self, client: ShopifyClient, order_id: int) -> None:
        super().__init__(client, f"orders/{order_id}/risks")
        self.order_id = order_id
