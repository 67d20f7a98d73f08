# reviewhub/config/logging.py

import json
import logging
from datetime import datetime, timezone

from reviewhub.core.context import correlation_id_ctx, organization_id_ctx

# Structured fields passed via `extra=` that are copied into the JSON line.
EXTRA_FIELDS = (
    "audit_id",
    "table_name",
    "record_id",
    "operation",
    "error",
)


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "correlation_id": correlation_id_ctx.get(),
            "organization_id": organization_id_ctx.get(),
        }
        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        return json.dumps(log_record, default=str)


def configure_logging(log_level: str):
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)
