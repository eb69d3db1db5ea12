"""JSON body encoding and typed decoding via pydantic."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from shopkit.sdk.exceptions import ResponseDecodingError


@lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def to_json_payload(body: Any) -> Any:
    """Convert models (also nested in dicts/lists) to JSON-ready data.

    ``None`` fields are omitted, matching the platform's partial-update
    semantics.
    """
    return to_jsonable_python(body, by_alias=True, exclude_none=True)


def decode_as(model: Any, payload: Any, *, body: bytes = b"", status: int = 0) -> Any:
    """Validate *payload* into *model*; raise :class:`ResponseDecodingError`."""
    try:
        return _adapter(model).validate_python(payload)
    except ValidationError as exc:
        raise ResponseDecodingError(str(exc), body=body, status=status) from exc
