"""Logging setup and configuration."""

import logging
import sys

from .filters import ContextFilter, DefaultDeliveryFilter
from .formatters import DevFormatter, JSONFormatter


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
) -> None:
    """Configure the root logger with appropriate formatter and filters."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if json_output:
        handler.setFormatter(JSONFormatter(environment))
    else:
        handler.setFormatter(DevFormatter())

    # ContextFilter runs first so real delivery ids win over placeholders
    handler.addFilter(ContextFilter())
    handler.addFilter(DefaultDeliveryFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
