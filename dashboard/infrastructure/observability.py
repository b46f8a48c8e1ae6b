"""Structured Logging — one JSON object per line, carrying invoice/view context.

Invariants:
    - Every line has timestamp (UTC, from the record), level, logger and message
    - Only whitelisted extras are emitted, and only when not None, so ad-hoc
      attributes on a record never leak into log output
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - log_format="text" for local runs, "json" everywhere else
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "invoice_id", "customer_id", "user_id", "view_key",
    "error_code", "failure_kind", "path",
)
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_HANDLER_NAME = "dashboard"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, getattr(record, key)) for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the dashboard handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
