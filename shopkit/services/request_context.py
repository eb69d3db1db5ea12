"""Per-call correlation ID via contextvars."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Return a new 32-character hex request ID."""
    return uuid.uuid4().hex


def get_request_id() -> str:
    """Read the current request ID from the contextvar."""
    return request_id_var.get()


@contextmanager
def call_scope() -> Iterator[str]:
    """Bind a fresh request ID for one logical client call.

    An ID already bound by the caller (e.g. an inbound web request) is kept,
    so retries and nested calls log under the caller's ID.
    """
    current = request_id_var.get()
    if current:
        yield current
        return
    token = request_id_var.set(generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)
