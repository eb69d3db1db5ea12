"""Gift cards."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource


class GiftCardCustomer(BaseModel):
    customer_id: int | None = None


class GiftCard(BaseModel):
    id: int | None = None
    api_client_id: int | None = None
    balance: Decimal | None = None
    initial_value: Decimal | None = None
    code: str | None = None
    currency: str | None = None
    customer_id: GiftCardCustomer | None = None
    created_at: datetime | None = None
    disabled_at: datetime | None = None
    expires_on: str | None = None
    last_characters: str | None = None
    line_item_id: int | None = None
    note: str | None = None
    order_id: int | None = None
    template_suffix: str | None = None
    user_id: int | None = None
    updated_at: datetime | None = None


class GiftCardResource(Resource[GiftCard]):
    model = GiftCard
    base_path = "gift_cards"
    singular = "gift_card"
    plural = "gift_cards"

    def disable(self, gift_card_id: int, **kwargs: Any) -> GiftCard | None:
        """Disable a gift card; disabling cannot be undone."""
        result = self._client.post(
            self._path(gift_card_id, "disable"),
            self._wrap(GiftCard(id=gift_card_id)),
            self._one(),
            **kwargs,
        )
        return result.gift_card
