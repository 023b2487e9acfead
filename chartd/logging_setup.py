"""Structured JSON logging stamped with the request ID of the current request."""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, TextIO

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_BUILTIN_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

REQUEST_ID_CONTEXT: ContextVar[str | None] = ContextVar("request_id", default=None)


def _iso_utc(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RequestIdFilter(logging.Filter):
    """Copy the request ID bound by ``RequestIdMiddleware`` onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = REQUEST_ID_CONTEXT.get()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited docstring
        extras = self.extra_fields(record)
        document: Dict[str, Any] = {
            "ts": _iso_utc(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = extras.pop("request_id", None)
        if request_id:
            document["request_id"] = request_id
        if record.exc_info:
            document["exception"] = self.formatException(record.exc_info)
        if extras:
            document["extra"] = extras
        return json.dumps(document, default=str, separators=(",", ":"))

    @staticmethod
    def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
        return {
            key: value
            for key, value in vars(record).items()
            if key not in _BUILTIN_FIELDS and not key.startswith("_")
        }


def setup_logging(level: int | str = logging.INFO, *, stream: TextIO | None = None) -> logging.Handler:
    """Attach a JSON handler to the root logger and return it.

    Handlers installed by others are left alone. If a JSON handler is already
    attached, only the level is updated and that handler is returned.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers:
        if isinstance(existing.formatter, JsonFormatter):
            return existing

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)
    return handler


__all__ = ["REQUEST_ID_CONTEXT", "JsonFormatter", "RequestIdFilter", "setup_logging"]
