"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import json
import logging

from conduit_providers.base.log_support import JsonFormatter
from conduit_providers.base.logging import (
    BASE_LOGGER_NAME,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
)


def test_get_logger_namespaces_under_base():
    logger = get_logger("registry")
    assert logger.name == f"{BASE_LOGGER_NAME}.registry"  # nosec B101 - asserts are appropriate in unit tests
    assert get_logger(f"{BASE_LOGGER_NAME}.x").name == f"{BASE_LOGGER_NAME}.x"  # nosec B101
    assert get_logger().propagate is False  # nosec B101


def test_env_level_applies(monkeypatch):
    monkeypatch.setenv("CONDUIT_LOG_LEVEL", "ERROR")
    assert get_logger().level == logging.ERROR  # nosec B101
    monkeypatch.setenv("CONDUIT_LOG_LEVEL", "debug")
    assert get_logger().level == logging.DEBUG  # nosec B101
    monkeypatch.delenv("CONDUIT_LOG_LEVEL")
    assert get_logger().level == logging.INFO  # nosec B101


def test_log_event_drops_none_fields_and_merges_context(log_events):
    logger = get_logger("tests.logging")
    ctx = LogContext(provider="openrouter", generation=2, extra={"identifier_kind": "url"})
    log_event(logger, "discovery.committed", ctx, model_count=3, error=None)

    event = log_events[-1]
    assert event["event"] == "discovery.committed"  # nosec B101
    assert event["provider"] == "openrouter"  # nosec B101
    assert event["generation"] == 2  # nosec B101
    assert event["identifier_kind"] == "url"  # nosec B101
    assert event["model_count"] == 3  # nosec B101
    assert "error" not in event and "model" not in event  # nosec B101


def test_log_context_with_model_copies():
    ctx = LogContext(provider="p", extra={"a": 1})
    bound = ctx.with_model("m")
    assert bound.model == "m" and ctx.model is None  # nosec B101
    assert bound.extra is not ctx.extra  # nosec B101


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord("conduit.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    data = json.loads(formatter.format(record))
    assert data["event"] == "e"  # nosec B101
    assert data["k"] == 1  # nosec B101
    assert data["level"] == "INFO"  # nosec B101
    assert data["logger"] == "conduit.x"  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "conduit.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("tests.file"), "file.event", level=logging.WARNING, value=1)
        for h in logger.handlers:
            h.flush()
        lines = path.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "file.event"  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(getattr(h, "_conduit_file_handler", False) for h in logger.handlers)  # nosec B101


def test_configure_logger_leaves_foreign_file_handlers(tmp_path):
    logger = get_logger()
    foreign = logging.FileHandler(str(tmp_path / "foreign.log"), encoding="utf-8")
    logger.addHandler(foreign)
    try:
        configure_logger(file_path=str(tmp_path / "managed.log"))
        configure_logger(file_path=None)
        assert foreign in logger.handlers  # nosec B101
        assert not any(getattr(h, "_conduit_file_handler", False) for h in logger.handlers)  # nosec B101
    finally:
        logger.removeHandler(foreign)
        foreign.close()
