"""Structured Logging — JSON formatter and setup for hook and API logs.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Hook context passed via `extra` (entity, record_id, locale, count,
      error_code, action) is surfaced when present, in both formats
    - setup_logging installs exactly one handler however often it is called
"""

import logging
import json
from datetime import datetime, timezone

HOOK_CONTEXT_FIELDS = (
    "entity", "record_id", "locale", "count", "error_code", "action",
)

_HANDLER_NAME = "localesync"


def _hook_context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key] for key in HOOK_CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_hook_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with hook context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s — %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _hook_context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
