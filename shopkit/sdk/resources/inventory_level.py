"""Inventory levels: available quantity of an item at a location."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from shopkit.sdk.resources.base import ListableResource


class InventoryLevel(BaseModel):
    inventory_item_id: int | None = None
    location_id: int | None = None
    # Always sent; zero is a meaningful quantity.
    available: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    admin_graphql_api_id: str | None = None


class InventoryLevelListOptions(BaseModel):
    inventory_item_ids: list[int] | None = None
    location_ids: list[int] | None = None
    limit: int | None = None
    updated_at_min: datetime | None = None


class InventoryLevelAdjustOptions(BaseModel):
    inventory_item_id: int
    location_id: int
    available_adjustment: int


class InventoryLevelResource(ListableResource[InventoryLevel]):
    """Inventory levels are addressed by item and location, not by id.

    ``adjust``, ``connect`` and ``set`` post the bare level (no envelope).
    """

    model = InventoryLevel
    base_path = "inventory_levels"
    singular = "inventory_level"
    plural = "inventory_levels"

    def _post(self, action: str, body: BaseModel, **kwargs: Any) -> InventoryLevel | None:
        result = self._client.post(self._path(action), body, self._one(), **kwargs)
        return result.inventory_level

    def adjust(self, options: InventoryLevelAdjustOptions, **kwargs: Any) -> InventoryLevel | None:
        return self._post("adjust", options, **kwargs)

    def connect(self, level: InventoryLevel, **kwargs: Any) -> InventoryLevel | None:
        return self._post("connect", level, **kwargs)

    def set(self, level: InventoryLevel, **kwargs: Any) -> InventoryLevel | None:
        return self._post("set", level, **kwargs)

    def delete(self, item_id: int, location_id: int, **kwargs: Any) -> None:
        self._client.delete(
            self._path(),
            {"inventory_item_id": item_id, "location_id": location_id},
            **kwargs,
        )
