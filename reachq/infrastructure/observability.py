"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (question, field, expression, error_code) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called on startup via lifespan; idempotent because test
      clients may start the app many times in one process
"""

import logging
import json
from datetime import datetime, timezone

_HANDLER_NAME = "reachq"

_EXTRA_KEYS = (
    "question", "field", "expression", "error_code", "path",
    "action_count", "max_traces",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def build_handler(fmt: str = "json") -> logging.Handler:
    """Stream handler with the JSON or text formatter."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging. Re-running replaces the previous reachq handler."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(build_handler(fmt))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
