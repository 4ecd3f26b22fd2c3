"""Tests for logging setup, context and formatters."""

import json
import logging

import pytest

from delivery_fares.fare_logging import (
    ContextFilter,
    DefaultDeliveryFilter,
    DevFormatter,
    JSONFormatter,
    LogContext,
    log_context,
    log_delivery_context,
    setup_logging,
)


def make_record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="delivery_fares.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestLogContext:
    def test_log_context_adds_fields(self):
        record = make_record()
        with log_context(delivery_id="d-1"):
            ContextFilter().filter(record)
        assert record.delivery_id == "d-1"

    def test_log_context_clears_on_exit(self):
        with log_context(delivery_id="d-2"):
            pass
        assert LogContext.get() == {}

    def test_nested_context_restores_outer_fields(self):
        with log_context(delivery_id="outer", run="r-1"):
            with log_context(delivery_id="inner"):
                assert LogContext.get() == {"delivery_id": "inner", "run": "r-1"}
            assert LogContext.get() == {"delivery_id": "outer", "run": "r-1"}
        assert LogContext.get() == {}

    def test_delivery_context_defaults_correlation_id(self):
        record = make_record()
        with log_delivery_context("d-3"):
            ContextFilter().filter(record)
        assert record.delivery_id == "d-3"
        assert record.correlation_id == "d-3"

    def test_existing_record_fields_win(self):
        record = make_record()
        record.delivery_id = "explicit"
        with log_context(delivery_id="from-context"):
            ContextFilter().filter(record)
        assert record.delivery_id == "explicit"


@pytest.mark.unit
class TestFormatters:
    def test_default_filter_adds_placeholders(self):
        record = make_record()
        DefaultDeliveryFilter().filter(record)
        assert record.delivery_id == "-"
        assert record.correlation_id == "-"

    def test_dev_formatter_includes_delivery_id(self):
        record = make_record("priced")
        record.delivery_id = "d-4"
        output = DevFormatter().format(record)
        assert "[d-4]: priced" in output

    def test_json_formatter(self):
        record = make_record("priced")
        record.delivery_id = "d-5"
        record.correlation_id = "-"

        data = json.loads(JSONFormatter(environment="test").format(record))

        assert data["message"] == "priced"
        assert data["level"] == "INFO"
        assert data["env"] == "test"
        assert data["delivery_id"] == "d-5"
        assert "correlation_id" not in data


@pytest.mark.unit
class TestSetupLogging:
    def test_installs_single_handler(self, restore_root_logger):
        setup_logging(level="DEBUG", json_output=True)

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
        assert restore_root_logger.level == logging.DEBUG

    def test_text_output_uses_dev_formatter(self, restore_root_logger):
        setup_logging()
        assert isinstance(restore_root_logger.handlers[0].formatter, DevFormatter)
