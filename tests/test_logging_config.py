"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from advocate_matching.logging import ComponentLoggerAdapter, get_logger
from advocate_matching.logging.config import (
    SERVICE_NAME,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from advocate_matching.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    formatter = JSONFormatter()

    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    log_obj = json.loads(formatter.format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert "timestamp" in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Matching completed",
        (),
        None,
        extra={"event": "match.completed", "matches_found": 3, "include_inactive": False},
    )
    log_obj = json.loads(formatter.format(record))

    assert log_obj["event"] == "match.completed"
    assert log_obj["matches_found"] == 3
    assert log_obj["include_inactive"] is False


def test_json_formatter_serializes_collections(logger):
    """Tuples become lists and sets become sorted lists."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Filtered",
        (),
        None,
        extra={"regions": ("europe", "apac"), "excluded": frozenset({"b", "a"})},
    )
    log_obj = json.loads(formatter.format(record))

    assert log_obj["regions"] == ["europe", "apac"]
    assert log_obj["excluded"] == ["a", "b"]


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds static service and environment fields."""
    context_filter = ContextualFilter(service="test-service", environment="test")

    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    context_filter.filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_defaults(logger):
    context_filter = ContextualFilter()

    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    context_filter.filter(record)

    assert record.service == SERVICE_NAME
    assert record.environment == "local"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter adds fields from log context."""
    context_filter = ContextualFilter()

    with log_context(opportunity_id="opp-1", batch_size=3):
        record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
        context_filter.filter(record)

    assert record.opportunity_id == "opp-1"
    assert record.batch_size == 3


def test_contextual_filter_explicit_extra_wins(logger):
    """Fields passed via extra are not overwritten by context fields."""
    context_filter = ContextualFilter()

    with log_context(opportunity_id="opp-context"):
        record = logger.makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "Test message",
            (),
            None,
            extra={"opportunity_id": "opp-explicit"},
        )
        context_filter.filter(record)

    assert record.opportunity_id == "opp-explicit"


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    formatter = JSONFormatter()
    context_filter = ContextualFilter(service="advocate-matcher", environment="test")

    with log_context(opportunity_id="opp-1"):
        record = logger.makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "Matching completed",
            (),
            None,
            extra={"event": "match.completed"},
        )
        context_filter.filter(record)
        log_obj = json.loads(formatter.format(record))

    assert log_obj["message"] == "Matching completed"
    assert log_obj["event"] == "match.completed"
    assert log_obj["service"] == "advocate-matcher"
    assert log_obj["environment"] == "test"
    assert log_obj["opportunity_id"] == "opp-1"


def test_key_value_formatter_basic(logger):
    """Test KeyValueFormatter produces readable output."""
    formatter = KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    output = formatter.format(record)

    assert "[INFO]" in output
    assert "Test message" in output


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter includes extra fields as key=value pairs."""
    formatter = KeyValueFormatter("%(message)s")

    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Advocate filtered out",
        (),
        None,
        extra={
            "event": "eligibility.filtered",
            "reason": "status_blacklisted",
            "note": "two words",
            "include_inactive": True,
            "region": None,
        },
    )
    output = formatter.format(record)

    assert "event=eligibility.filtered" in output
    assert "reason=status_blacklisted" in output
    assert 'note="two words"' in output
    assert "include_inactive=true" in output
    assert "region=null" in output


def test_key_value_formatter_skips_static_fields(logger):
    formatter = KeyValueFormatter("%(message)s")
    context_filter = ContextualFilter(environment="test")

    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    context_filter.filter(record)

    assert formatter.format(record) == "Test message"


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format():
    """Test configure_logging with JSON format."""
    configure_logging(level="INFO", format_type="json", environment="test")

    root_logger = logging.getLogger()
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
    assert root_logger.level == logging.INFO


def test_configure_logging_key_value_format():
    """Test configure_logging with key-value format."""
    configure_logging(level="debug", format_type="key-value", environment="test")

    root_logger = logging.getLogger()
    assert isinstance(root_logger.handlers[0].formatter, KeyValueFormatter)
    assert root_logger.level == logging.DEBUG


def test_configure_logging_writes_to_stream():
    """Records reach the given stream with service metadata attached."""
    stream = io.StringIO()
    configure_logging(level="INFO", format_type="json", environment="staging", stream=stream)

    with log_context(opportunity_id="opp-7"):
        logging.getLogger("advocate_matching.test").info(
            "Matching completed", extra={"event": "match.completed"}
        )

    lines = [line for line in stream.getvalue().splitlines() if line]
    log_obj = json.loads(lines[-1])
    assert log_obj["event"] == "match.completed"
    assert log_obj["service"] == SERVICE_NAME
    assert log_obj["environment"] == "staging"
    assert log_obj["opportunity_id"] == "opp-7"


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces correct ISO-8601 timestamp format."""
    formatter = JSONFormatter()

    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)
    timestamp = json.loads(formatter.format(record))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2026-01-15T10:30:00.123Z


def test_json_formatter_no_duplicate_fields(logger):
    """Test that JSON formatter doesn't duplicate standard fields in extras."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None, extra={"event": "x"}
    )
    log_obj = json.loads(formatter.format(record))

    assert "name" not in log_obj
    assert "levelno" not in log_obj
    assert "event" in log_obj


class TestGetLogger:
    """Tests for get_logger and ComponentLoggerAdapter."""

    def test_plain_logger_without_component(self):
        assert isinstance(get_logger("advocate_matching.test"), logging.Logger)

    def test_component_adapter(self, caplog):
        adapter = get_logger("advocate_matching.test", component="matching")
        assert isinstance(adapter, ComponentLoggerAdapter)

        with caplog.at_level(logging.INFO, logger="advocate_matching.test"):
            adapter.info("Scored", extra={"event": "advocate.scored"})

        record = caplog.records[-1]
        assert record.component == "matching"
        assert record.event == "advocate.scored"

    def test_per_call_extra_overrides_component(self, caplog):
        adapter = get_logger("advocate_matching.test", component="matching")

        with caplog.at_level(logging.INFO, logger="advocate_matching.test"):
            adapter.info("Override", extra={"component": "cli"})

        assert caplog.records[-1].component == "cli"
