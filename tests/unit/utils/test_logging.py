"""Tests for logging setup and formatters."""

import json
import logging

import pytest

from config.settings import LoggingConfig
from optiscope.utils.logging import (
    JSONFormatter,
    TextFormatter,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture
def restore_root_logger():
    """Restore root handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "computed %d values", args=(5,), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="optiscope.indicators.momentum",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_fields(self):
        """Test core fields and the formatted message."""
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "optiscope.indicators.momentum"
        assert data["message"] == "computed 5 values"
        assert data["timestamp"].endswith("Z")
        assert data["location"]["line"] == 10

    def test_context(self):
        """Test extra fields are emitted under context."""
        data = json.loads(JSONFormatter().format(_record(symbol="SPY", expiration=object())))
        assert data["context"]["symbol"] == "SPY"
        assert isinstance(data["context"]["expiration"], str)

    def test_extras_disabled(self):
        """Test extras can be left out."""
        data = json.loads(JSONFormatter(include_extras=False).format(_record(symbol="SPY")))
        assert "context" not in data


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_plain(self):
        """Test level, logger and message appear in order."""
        line = TextFormatter().format(_record())
        assert "| INFO     | optiscope.indicators.momentum | computed 5 values" in line

    def test_context(self):
        """Test extras are appended as key=value pairs."""
        line = TextFormatter().format(_record(symbol="SPY", side="call"))
        assert line.endswith("| symbol=SPY side=call")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self, restore_root_logger):
        """Test a single console handler with the chosen formatter."""
        setup_logging(level="debug", format="json")
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_rotating_file(self, restore_root_logger, tmp_path):
        """Test a rotating file handler is added when a file is given."""
        log_file = tmp_path / "logs" / "optiscope.log"
        setup_logging_from_config(LoggingConfig(file=log_file, rotate_size_mb=1, retain_count=2))

        logging.getLogger("optiscope.test").warning("written")
        root = restore_root_logger
        file_handler = root.handlers[1]
        file_handler.flush()

        assert file_handler.maxBytes == 1024 * 1024
        assert file_handler.backupCount == 2
        assert "written" in log_file.read_text()
