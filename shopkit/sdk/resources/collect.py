"""Collects: the link between a product and a custom collection."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource


class Collect(BaseModel):
    id: int | None = None
    collection_id: int | None = None
    product_id: int | None = None
    featured: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    position: int | None = None
    sort_value: str | None = None


class CollectResource(Resource[Collect]):
    model = Collect
    base_path = "collects"
    singular = "collect"
    plural = "collects"
