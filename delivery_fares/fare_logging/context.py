"""Per-thread logging context for fare workers.

Pool threads are reused across deliveries, so every context is scoped to
a ``with`` block and the previous fields are restored when it exits.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class _ContextState(threading.local):
    def __init__(self) -> None:
        self.fields: dict[str, Any] = {}


class LogContext:
    """Thread-local fields merged into every log record of the current thread."""

    _state = _ContextState()

    @classmethod
    def get(cls) -> dict[str, Any]:
        return dict(cls._state.fields)

    @classmethod
    def replace(cls, fields: dict[str, Any]) -> None:
        cls._state.fields = dict(fields)

    @classmethod
    def clear(cls) -> None:
        cls._state.fields = {}


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Add fields to log records emitted by this thread inside the block.

    Fields reach records through ContextFilter, which setup_logging
    attaches to the root handler.
    """
    previous = LogContext.get()
    LogContext.replace({**previous, **kwargs})
    try:
        yield
    finally:
        LogContext.replace(previous)


@contextmanager
def log_delivery_context(delivery_id: str, **kwargs: Any) -> Iterator[None]:
    """Tag log records with the delivery being priced."""
    correlation_id = kwargs.pop("correlation_id", delivery_id)
    with log_context(delivery_id=delivery_id, correlation_id=correlation_id, **kwargs):
        yield
