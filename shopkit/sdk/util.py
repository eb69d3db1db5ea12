"""Shop-name normalisation, path prefixes and date helpers."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

_DOMAIN = "myshopify.com"


def shop_full_name(name: str) -> str:
    """Return the full shop domain, e.g. ``myshop.myshopify.com``."""
    name = name.strip().strip(".")
    if _DOMAIN in name:
        return name
    return f"{name}.{_DOMAIN}"


def shop_short_name(name: str) -> str:
    """Return the shop name without the ``.myshopify.com`` suffix."""
    return shop_full_name(name).replace(f".{_DOMAIN}", "")


def shop_base_url(name: str) -> str:
    return f"https://{shop_full_name(name)}"


def metafield_path_prefix(resource: str = "", resource_id: int = 0) -> str:
    """``metafields`` or ``<resource>/<id>/metafields`` for owned metafields."""
    if resource:
        return f"{resource}/{resource_id}/metafields"
    return "metafields"


def fulfillment_path_prefix(resource: str = "", resource_id: int = 0) -> str:
    if resource:
        return f"{resource}/{resource_id}/fulfillments"
    return "fulfillments"


def _empty_date(value: Any) -> Any:
    if value in ("", "null"):
        return None
    return value


# A calendar date sent as "YYYY-MM-DD"; an empty string decodes to None.
OnlyDate = Annotated[
    date | None,
    BeforeValidator(_empty_date),
    PlainSerializer(lambda d: d.isoformat() if d else None, return_type=str | None),
]
