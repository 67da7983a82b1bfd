"""Log output — one root handler emitting JSON lines or plain text.

Invariants:
    - Every JSON line carries timestamp, level, logger and message
    - Question and enrichment context (question_id, record_count,
      enrichment_status, ...) appears only when the call site passed it
    - setup_logging is idempotent: a restarted app replaces its handler
      instead of stacking a second one
"""

import logging
import json
from datetime import datetime, timezone

# Keys a call site may pass through `extra=` that end up in the JSON line
CONTEXT_KEYS = (
    "question_id", "operation", "path", "error_code",
    "record_count", "url_count", "missing_count", "enrichment_status",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update({
            key: record.__dict__[key]
            for key in CONTEXT_KEYS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class _AppHandler(logging.StreamHandler):
    """Marker type so setup_logging can find the handler it installed."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the app's root handler and set the root level."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _AppHandler)]:
        root.removeHandler(existing)

    handler = _AppHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
