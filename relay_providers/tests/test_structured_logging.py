from __future__ import annotations

import json
import logging

from relay_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from relay_providers.base.log_support import JsonFormatter


def test_normalized_event_has_required_keys(capture_logger):
    handler = capture_logger("relay_providers.test.normalized")
    logger = get_logger("relay_providers.test.normalized")
    normalized_log_event(logger, "stream.producer.end", LogContext(provider="ark", model="ep"), phase="finalize")
    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in payload  # nosec B101
    assert "error_code" not in payload  # nosec B101
    assert payload["provider"] == "ark" and payload["event"] == "stream.producer.end"  # nosec B101


def test_normalized_event_error_code_alias_and_extras(capture_logger):
    handler = capture_logger("relay_providers.test.alias")
    normalized_log_event(
        get_logger("relay_providers.test.alias"),
        "retry.attempt",
        phase="generate",
        attempt=1,
        error_code="timeout",
        tokens=[("prompt", 1)],
        phase_extra=None,
        delay=2.0,
    )
    payload = json.loads(handler.messages[-1])
    assert payload["code"] == "timeout" and payload["error_code"] == "timeout"  # nosec B101
    assert payload["tokens"] == {"prompt": 1}  # nosec B101
    assert payload["delay"] == 2.0 and "phase_extra" not in payload  # nosec B101


def test_log_event_drops_none_and_serializes_objects(capture_logger):
    handler = capture_logger("relay_providers.test.plain")
    log_event(get_logger("relay_providers.test.plain"), "x", LogContext(model="m").with_extra(attempt_id=3), a=None, b=object)
    payload = json.loads(handler.messages[-1])
    assert "a" not in payload and payload["attempt_id"] == 3  # nosec B101
    assert payload["b"].startswith("<class")  # nosec B101


def test_child_loggers_propagate_to_base():
    child = get_logger("relay_providers.test.child")
    base = get_logger()
    assert child.propagate and not base.propagate  # nosec B101


def test_json_formatter_hoists_event_payload():
    record = logging.LogRecord("relay_providers.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    record.request_tag = "t-1"
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 1  # nosec B101
    assert out["logger"] == "relay_providers.x" and out["level"] == "INFO"  # nosec B101
    assert out["request_tag"] == "t-1"  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "relay.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        assert logger.level == logging.DEBUG  # nosec B101
        assert any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(getattr(h, "baseFilename", None) for h in logger.handlers)  # nosec B101
