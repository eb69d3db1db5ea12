"""Query option models and ``Link`` header cursor pagination."""

from __future__ import annotations

import enum
import re
from datetime import date, datetime
from typing import Any, Mapping
from urllib.parse import parse_qs, urlencode, urlsplit

from pydantic import BaseModel

from shopkit.sdk.exceptions import ResponseDecodingError

LINK_HEADER = "link"

# One entry of the header: <url>; rel="next"
_LINK_RE = re.compile(r'^ *<([^>]+)>; rel="(previous|next)" *$')
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_LIMIT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


class ListOptions(BaseModel):
    """Query parameters shared by list endpoints.

    ``page_info`` and ``limit`` drive cursor pagination; when ``page_info``
    is set the platform ignores every other filter.
    """

    page_info: str | None = None
    page: int | None = None
    limit: int | None = None
    since_id: int | None = None
    created_at_min: datetime | None = None
    created_at_max: datetime | None = None
    updated_at_min: datetime | None = None
    updated_at_max: datetime | None = None
    order: str | None = None
    fields: str | None = None
    vendor: str | None = None
    ids: list[int] | None = None


class CountOptions(BaseModel):
    """Query parameters accepted by ``count.json`` endpoints."""

    created_at_min: datetime | None = None
    created_at_max: datetime | None = None
    updated_at_min: datetime | None = None
    updated_at_max: datetime | None = None


class Pagination(BaseModel):
    """Cursor options for the adjacent pages; either may be absent."""

    next_page_options: ListOptions | None = None
    previous_page_options: ListOptions | None = None

    def to_link_header(self, base_url: str) -> str:
        """Render the cursors back into ``Link`` header form."""
        entries = []
        for rel, options in (
            ("next", self.next_page_options),
            ("previous", self.previous_page_options),
        ):
            if options is None:
                continue
            query: dict[str, Any] = {"page_info": options.page_info}
            if options.limit is not None:
                query["limit"] = options.limit
            entries.append(f'<{base_url}?{urlencode(query)}>; rel="{rel}"')
        return ", ".join(entries)


# ---------------------------------------------------------------------------
# Option encoding
# ---------------------------------------------------------------------------


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set)):
        return ",".join(_encode_value(v) for v in value)
    return str(value)


def encode_options(options: BaseModel | Mapping[str, Any] | None) -> dict[str, str]:
    """Flatten an options model or mapping into query parameters.

    ``None`` values are dropped and sequences are comma-joined.
    """
    if options is None:
        return {}
    if isinstance(options, BaseModel):
        raw = options.model_dump(exclude_none=True, by_alias=True)
    else:
        raw = dict(options)
    return {key: _encode_value(value) for key, value in raw.items() if value is not None}


# ---------------------------------------------------------------------------
# Link header parsing
# ---------------------------------------------------------------------------


def _check_escapes(query: str) -> None:
    match = _BAD_ESCAPE_RE.search(query)
    if match:
        bad = query[match.start() : match.start() + 3]
        raise ValueError(f'invalid URL escape "{bad}"')


def _parse_limit(raw: str) -> int:
    if not _LIMIT_RE.fullmatch(raw):
        raise ValueError(f"invalid limit {raw!r}")
    return int(raw)


def _page_options(raw_url: str) -> ListOptions:
    # Relative references are accepted; an empty scheme (":...") is not.
    try:
        parts = urlsplit(raw_url)
    except ValueError:
        parts = None
    if parts is None or raw_url.startswith(":"):
        raise ResponseDecodingError("pagination does not contain a valid URL")

    _check_escapes(parts.query)
    params = parse_qs(parts.query, keep_blank_values=True)

    page_info = params.get("page_info", [""])[0]
    if not page_info:
        raise ResponseDecodingError("page_info is missing")

    options = ListOptions(page_info=page_info)
    limit = params.get("limit", [""])[0]
    if limit:
        options.limit = _parse_limit(limit)
    return options


def extract_pagination(link_header: str | None) -> Pagination:
    """Parse a ``Link`` header into next/previous cursor options.

    An absent or empty header yields an empty :class:`Pagination`. Structural
    problems raise :class:`ResponseDecodingError`; malformed percent-escapes
    and non-numeric limits raise :class:`ValueError`.
    """
    pagination = Pagination()
    if not link_header:
        return pagination

    for link in link_header.split(","):
        match = _LINK_RE.match(link)
        if match is None:
            raise ResponseDecodingError("could not extract pagination link header")

        options = _page_options(match.group(1))
        if match.group(2) == "next":
            pagination.next_page_options = options
        else:
            pagination.previous_page_options = options

    return pagination
