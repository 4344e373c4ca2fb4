"""Structured Logging — JSON and text formatters, configured once per process.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (board_id, path, method, ...) surfaced when present
    - setup_logging replaces root handlers, so repeated calls never duplicate output
    - "WARN" is accepted as a level name; unknown names fall back to WARNING
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "board_id", "path", "method", "exception_type", "status_code", "endpoint",
)

TEXT_FORMAT = "[%(levelname)s] %(asctime)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def resolve_level(level: str) -> int:
    """Map a level name (case-insensitive, WARN allowed) to a logging level."""
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str = "WARN", fmt: str = "text") -> None:
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
