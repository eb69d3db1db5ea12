"""Logging setup for shopkit (JSON and text formatters)."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from shopkit.config import settings
from shopkit.services.request_context import get_request_id

# Attributes present on every LogRecord; anything else is a caller extra.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Extras that may carry credentials are masked before output.
_SECRET_EXTRAS: frozenset[str] = frozenset(
    {"token", "access_token", "password", "api_key", "authorization"}
)

_MASK = "***"


def _redact(key: str, value: object) -> object:
    if key.lower() in _SECRET_EXTRAS:
        return _MASK
    if isinstance(value, dict):
        return {k: _redact(str(k), v) for k, v in value.items()}
    return value


class JSONFormatter(logging.Formatter):
    """Single-line JSON log output for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        entry: dict = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        call_id = get_request_id()
        if call_id:
            entry["call_id"] = call_id

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                entry[key] = _redact(key, value)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = "".join(
                traceback.format_exception(*record.exc_info)
            )

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text format with an optional call ID prefix."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        ts = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).strftime("%Y-%m-%d %H:%M:%S")

        call_id = get_request_id()
        cid_prefix = f"[{call_id[:12]}] " if call_id else ""

        line = f"{ts} {record.levelname:<8} {cid_prefix}{record.name} - {record.message}"

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line


def setup_logging(
    log_level: str | None = None,
    log_format: str | None = None,
    logger_name: str = "shopkit",
) -> logging.Logger:
    """Attach a stderr handler to the ``shopkit`` logger.

    Defaults come from :data:`shopkit.config.settings`. Pass
    ``logger_name=""`` to configure the root logger instead.
    """
    level = (log_level or settings.log_level).upper()
    fmt = (log_format or settings.log_format).lower()

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Remove existing handlers to avoid duplicate output on repeated setup
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    logger.addHandler(handler)
    return logger
