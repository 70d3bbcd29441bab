"""JSON line formatter for the ``relay_providers`` logger tree.

Every record becomes one JSON object. Messages produced by ``log_event``
are JSON already; their keys are hoisted to the top level instead of being
nested as an escaped string.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_FIELDS = frozenset(
    (
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
    )
)


def _parse_event(text: str):
    if not text.startswith("{"):
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Format records as ``{"ts", "level", "logger", ...}`` JSON lines.

    ``extra=`` attributes of the record are merged in unless they collide with
    a key already present. Values that are not JSON-serializable (enums,
    exceptions) are rendered with ``str``. Exception info goes under ``exc``.
    """

    def format(self, record: logging.LogRecord) -> str:
        out = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        text = record.getMessage()
        event = _parse_event(text)
        if event is None:
            out["msg"] = text
        else:
            out.update(event)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_FIELDS or key in out:
                continue
            out[key] = value
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
