"""Log filters for delivery context fields."""

import logging

from .context import LogContext

DELIVERY_FIELDS = ("delivery_id", "correlation_id")


class ContextFilter(logging.Filter):
    """Copies LogContext fields onto records that do not already set them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class DefaultDeliveryFilter(logging.Filter):
    """Fills missing delivery fields with '-' so formatters can reference them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in DELIVERY_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True
