"""Metafields, shop-level or owned by another resource."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from shopkit.sdk.resources.base import Resource


class MetafieldType(str, enum.Enum):
    BOOLEAN = "boolean"
    COLOR = "color"
    DATE = "date"
    DATETIME = "date_time"
    DIMENSION = "dimension"
    JSON = "json"
    MONEY = "money"
    MULTI_LINE_TEXT_FIELD = "multi_line_text_field"
    NUMBER_DECIMAL = "number_decimal"
    NUMBER_INTEGER = "number_integer"
    RATING = "rating"
    RICH_TEXT_FIELD = "rich_text_field"
    SINGLE_LINE_TEXT_FIELD = "single_line_text_field"
    URL = "url"
    VOLUME = "volume"
    WEIGHT = "weight"


class Metafield(BaseModel):
    """A namespaced key/value attached to a resource.

    ``value`` is always stored as a string server-side; ``type`` says how
    to interpret it.
    """

    id: int | None = None
    namespace: str | None = None
    key: str | None = None
    value: Any = None
    type: MetafieldType | None = None
    description: str | None = None
    owner_id: int | None = None
    owner_resource: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    admin_graphql_api_id: str | None = None


class MetafieldResource(Resource[Metafield]):
    model = Metafield
    base_path = "metafields"
    singular = "metafield"
    plural = "metafields"
