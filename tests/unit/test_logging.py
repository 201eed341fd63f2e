"""Unit tests for log formatters."""

import json
import logging
import sys

import pytest
import structlog

from voicetune_core.core.logging import (
    JSONFormatter,
    PrettyFormatter,
    SimpleFormatter,
    _configure_structlog,
)


def make_record(message="settings_saved", **extra):
    record = logging.LogRecord(
        name="voicetune_core.sync",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the log formatters."""

    def test_json_formatter(self):
        output = json.loads(JSONFormatter().format(make_record(user_id="usr_1", resource="agent")))

        assert output["level"] == "INFO"
        assert output["message"] == "settings_saved"
        assert output["logger"] == "voicetune_core.sync"
        assert output["user_id"] == "usr_1"
        assert output["context"] == {"resource": "agent"}

    def test_json_formatter_with_exception(self):
        try:
            raise ValueError("disk full")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        output = json.loads(JSONFormatter().format(record))

        assert output["error"] == {"type": "ValueError", "message": "disk full"}
        assert "stack_trace" in output

    def test_pretty_formatter_includes_extras(self):
        output = PrettyFormatter().format(make_record(status_code=422))

        assert "settings_saved" in output
        assert "status_code=422" in output

    def test_simple_formatter(self):
        output = SimpleFormatter().format(make_record())

        assert "[INFO] voicetune_core.sync: settings_saved" in output


class _CollectingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestStructlogRouting:
    """Tests for structlog events passing through the stdlib formatters."""

    @pytest.fixture
    def handler(self):
        _configure_structlog()
        handler = _CollectingHandler()
        stdlib_logger = logging.getLogger("voicetune_test_events")
        stdlib_logger.setLevel(logging.INFO)
        stdlib_logger.addHandler(handler)
        stdlib_logger.propagate = False

        yield handler

        stdlib_logger.removeHandler(handler)
        structlog.reset_defaults()

    def test_event_keys_become_context(self, handler):
        structlog.get_logger("voicetune_test_events").warning(
            "settings_not_persisted",
            user_id="usr_1",
            reason="disk full",
        )

        output = json.loads(JSONFormatter().format(handler.records[0]))

        assert output["message"] == "settings_not_persisted"
        assert output["level"] == "WARNING"
        assert output["user_id"] == "usr_1"
        assert output["context"] == {"reason": "disk full"}

    def test_exception_is_kept_structured(self, handler):
        log = structlog.get_logger("voicetune_test_events")
        try:
            raise RuntimeError("database is locked")
        except RuntimeError:
            log.exception("settings_store_error", user_id="usr_1")

        output = json.loads(JSONFormatter().format(handler.records[0]))

        assert output["message"] == "settings_store_error"
        assert output["error"] == {"type": "RuntimeError", "message": "database is locked"}

    def test_below_level_is_dropped(self, handler):
        structlog.get_logger("voicetune_test_events").debug("settings_not_found", user_id="usr_1")
        assert handler.records == []
