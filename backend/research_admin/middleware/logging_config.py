"""
Logging configuration.

LOG_FORMAT=text keeps the plain "time [LEVEL] logger: message" lines;
LOG_FORMAT=json emits one JSON object per record with the request ID and
caller job title attached.
"""

import json
import logging
from datetime import datetime, timezone

from research_admin.middleware.request_context import get_job_title, get_request_id

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id(),
        }

        job_title = get_job_title()
        if job_title:
            log_entry["job_title"] = job_title

        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Install a single stream handler on the root logger."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    if log_format != "json":
        logging.basicConfig(level=level, format=TEXT_FORMAT)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
