from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from moodjournal.app.core import config
from moodjournal.app.core.logging import (
    JsonFormatter,
    bind_request_id,
    configure_logging,
    get_request_id,
    reset_request_id,
)


@pytest.fixture(autouse=True)
def reset_settings_cache() -> None:
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture()
def bare_root_logger():
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)
    try:
        yield root_logger
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        for handler in original_handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(original_level)


def test_configure_logging_creates_handlers(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    bare_root_logger: logging.Logger,
) -> None:
    log_file = tmp_path / "logs" / "app.log"
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.chdir(tmp_path)

    configure_logging()
    handlers = [
        handler
        for handler in bare_root_logger.handlers
        if isinstance(handler, RotatingFileHandler)
    ]
    assert handlers
    assert Path(handlers[0].baseFilename) == log_file
    assert bare_root_logger.level == logging.WARNING

    handler_count = len(bare_root_logger.handlers)
    configure_logging()
    assert len(bare_root_logger.handlers) == handler_count


def test_configure_logging_ignores_foreign_handlers(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    bare_root_logger: logging.Logger,
) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))
    monkeypatch.chdir(tmp_path)
    bare_root_logger.addHandler(logging.NullHandler())

    configure_logging()

    assert any(isinstance(h, RotatingFileHandler) for h in bare_root_logger.handlers)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_outputs_keys() -> None:
    record = _record()
    record.request_id = "req-1"
    record.time_range = "30days"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["request_id"] == "req-1"
    assert payload["time_range"] == "30days"
    assert payload["level"] == "INFO"


def test_json_formatter_merges_extra_fields_and_keeps_emoji() -> None:
    record = _record("mood saved 😊")
    record.extra_fields = {"entries_total": 3, "day": Path("2024-01-04")}

    output = JsonFormatter().format(record)
    payload = json.loads(output)

    assert "😊" in output
    assert payload["entries_total"] == 3
    assert payload["day"] == "2024-01-04"


def test_json_formatter_uses_bound_request_id() -> None:
    token = bind_request_id("req-ctx")
    try:
        assert get_request_id() == "req-ctx"
        payload = json.loads(JsonFormatter().format(_record()))
    finally:
        reset_request_id(token)

    assert payload["request_id"] == "req-ctx"
    assert get_request_id() is None
    assert "request_id" not in json.loads(JsonFormatter().format(_record()))
