"""Log formatters for JSON and human-readable output."""

import json
import logging
from datetime import UTC, datetime


class JSONFormatter(logging.Formatter):
    """Formats logs as JSON for production environments."""

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service_name": "delivery-fares",
            "env": self.environment,
        }

        for field in ("delivery_id", "correlation_id"):
            value = getattr(record, field, None)
            if value is not None and value != "-":
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class DevFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s [%(delivery_id)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
