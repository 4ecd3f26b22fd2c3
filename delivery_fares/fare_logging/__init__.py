from .context import LogContext, log_context, log_delivery_context
from .filters import ContextFilter, DefaultDeliveryFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import get_logger, setup_logging

__all__ = [
    "ContextFilter",
    "DefaultDeliveryFilter",
    "DevFormatter",
    "JSONFormatter",
    "LogContext",
    "get_logger",
    "log_context",
    "log_delivery_context",
    "setup_logging",
]
