from __future__ import annotations

import json
import logging
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

from .config import Settings, get_settings

_CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "status",
    "duration_ms",
    "time_range",
)
_HANDLER_MARKER = "_moodjournal_handler"

_request_id_ctx: ContextVar[str | None] = ContextVar("moodjournal_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


def bind_request_id(request_id: str) -> Token[str | None]:
    """Attach ``request_id`` to log records emitted from the current context."""

    return _request_id_ctx.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id_ctx.reset(token)


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON line.

    Known context attributes passed through ``extra`` become top-level keys,
    and an ``extra_fields`` dict is merged in as-is. Records emitted while a
    request is in flight pick up its request id even when the caller did not
    pass one.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if "request_id" not in payload and (request_id := get_request_id()):
            payload["request_id"] = request_id

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            payload.update(extra_fields)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(settings: Settings | None = None) -> None:
    """Install the JSON file and console handlers on the root logger once."""

    settings = settings or get_settings()
    root_logger = logging.getLogger()
    if any(getattr(handler, _HANDLER_MARKER, False) for handler in root_logger.handlers):
        return

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    formatter = JsonFormatter()
    file_handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()

    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)


__all__ = [
    "JsonFormatter",
    "bind_request_id",
    "configure_logging",
    "get_request_id",
    "reset_request_id",
]
