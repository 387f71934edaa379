"""Structured Logging — JSON or key=value lines carrying directory context fields.

Invariants:
    - Every record has timestamp, level, logger name, and message
    - Context passed via `extra=` (enterprise_id, operation, strategy, ...) is
      emitted by both formats, never dropped
    - setup_logging() is idempotent: calling it again replaces its own handler

Design Decisions:
    - stdlib logging with a small formatter pair, set up once from the lifespan
    - SQLAlchemy engine logging pinned to WARNING so SQL echo never floods request logs
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS: tuple[str, ...] = (
    "enterprise_id", "operation", "strategy", "provider", "error_code", "path",
)

_HANDLER_NAME = "directory_api"


def record_context(record: logging.LogRecord) -> dict:
    """Context fields present on a record, in CONTEXT_FIELDS order."""
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
