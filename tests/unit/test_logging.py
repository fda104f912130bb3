"""Unit tests for logging setup."""

import json
import logging
import sys

import pytest

from meshtastic_map.utils.logging import JSONFormatter, TextFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(message="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("meshtastic_map.test", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter."""

    def test_basic_fields(self):
        """Test the standard keys are present."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "meshtastic_map.test"
        assert data["message"] == "hello"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_are_included(self):
        """Test values passed via extra appear in the output."""
        data = json.loads(JSONFormatter().format(make_record(node_id=42, path="/api/v1/nodes")))

        assert data["node_id"] == 42
        assert data["path"] == "/api/v1/nodes"

    def test_unserializable_extra(self):
        """Test non-JSON values are stringified."""
        data = json.loads(JSONFormatter().format(make_record(blob=object())))
        assert data["blob"].startswith("<object object")

    def test_exception_is_included(self):
        """Test exc_info is rendered."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:
    """Test TextFormatter."""

    def test_plain_output(self):
        """Test formatting without colours."""
        output = TextFormatter(use_colors=False).format(make_record(level=logging.WARNING))

        assert "[WARNING] meshtastic_map.test: hello" in output


class TestSetupLogging:
    """Test setup_logging."""

    def test_json_handler(self, restore_root_logger):
        """Test JSON format installs a single JSON handler."""
        setup_logging("debug", "json")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_text_handler(self, restore_root_logger):
        """Test text format installs a text handler."""
        setup_logging("WARNING", "text")

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, TextFormatter)

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        """Test an unrecognized level name."""
        setup_logging("chatty", "json")
        assert restore_root_logger.level == logging.INFO

    def test_uvicorn_propagates(self, restore_root_logger):
        """Test uvicorn loggers go through the root handler."""
        setup_logging("INFO", "json")

        access = logging.getLogger("uvicorn.access")
        assert access.handlers == []
        assert access.propagate is True
