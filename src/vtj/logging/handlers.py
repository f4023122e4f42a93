"""Custom logging handlers for the transcode job.

Provides JSONFormatter for structured log output. Job fields that log
aggregators filter on (rendition, tool, destination) are promoted to
top-level keys; any other ``extra`` goes under ``context``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Promoted to top-level keys when set on a record
JOB_FIELDS: tuple[str, ...] = ("rendition", "tool", "destination")


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Each log entry is a valid JSON object with:
    - timestamp: ISO-8601 UTC
    - level: Log level name
    - message: Log message
    - rendition: Rendition being processed (from RenditionContextFilter)
    - tool: External tool the record is about ("ffmpeg", "ffprobe")
    - destination: Delivery URL or path
    - context: Any other extra attributes (bytes_written, pid, ...)
    """

    # Standard LogRecord attributes to exclude from context
    _STANDARD_ATTRS: frozenset[str] = frozenset(
        {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "message",
            "exc_info",
            "exc_text",
            "stack_info",
            "taskName",
            # Text-only prefix added by RenditionContextFilter
            "rendition_tag",
            *JOB_FIELDS,
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted string.
        """
        record_time = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: dict[str, Any] = {
            "timestamp": record_time.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if record.name and record.name != "root":
            log_entry["logger"] = record.name

        for field in JOB_FIELDS:
            value = getattr(record, field, None)
            if value:
                log_entry[field] = value

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS and not key.startswith("_")
        }
        if context:
            log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)
