"""JSON-line logging for the service.

Every record becomes one JSON object on stdout. Structured fields travel via
``logger.info("msg", extra={...})``; values JSON cannot express (exceptions
attached by the error wrapper, for instance) are rendered readably instead of
breaking the line.

`setup_logging()` is idempotent: repeated calls never duplicate handlers.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

__all__ = [
    "JsonFormatter",
    "resolve_level",
    "setup_logging",
    "get_logger",
]

# Attributes every LogRecord carries; anything else on a record came from `extra`.
_RESERVED = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

# DEBUG_LEVEL uses winston's level names; map them onto stdlib levels.
_LEVEL_ALIASES = {
    "silly": logging.DEBUG,
    "verbose": logging.DEBUG,
    "debug": logging.DEBUG,
    "http": logging.INFO,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseException):
        return {"type": type(value).__name__, "message": str(value)}
    return str(value)


class JsonFormatter(logging.Formatter):
    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED or key in payload:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=_jsonable)


def resolve_level(level: str | int) -> int:
    """Map a level name (stdlib or winston style) or number to a logging level."""
    if isinstance(level, int):
        return level
    return _LEVEL_ALIASES.get(level.strip().lower(), logging.INFO)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def setup_logging(level: str | int = "info") -> None:
    """Attach the JSON handler to the root logger unless one is already there."""
    root = logging.getLogger()
    if root.handlers:  # reload / tests
        return

    lvl = resolve_level(level)
    root.setLevel(lvl)
    root.addHandler(_make_stream_handler(lvl))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.setLevel(lvl)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name if name else "zscanner")
