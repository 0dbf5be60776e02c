"""Logging configuration for rentals.

Log lines go to stderr so the CLI can keep stdout for its own output.
Services attach store context through ``extra=``, e.g.::

    logger.error("Update failed", extra={"application_id": doc_id, "error_code": exc.code})

Those attributes show up as top-level keys in JSON output.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
STANDARD_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Record attributes copied into JSON output when a caller sets them
CONTEXT_FIELDS = ("application_id", "property_id", "collection", "error_code")

QUIET_LOGGERS = ("faker", "asyncio")


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """Install a single stderr handler on the root logger.

    Parameters
    ----------
    level : str
        Level name; unknown names fall back to INFO.
    format_type : str
        ``"json"`` for one JSON object per line, anything else for the
        pipe-separated text format.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        JsonFormatter() if format_type == "json" else logging.Formatter(STANDARD_FORMAT, STANDARD_DATEFMT)
    )

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    logging.getLogger("rentals").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with store context lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)

        return json.dumps(payload, default=str)
