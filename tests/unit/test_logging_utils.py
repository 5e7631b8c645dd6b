"""Unit tests for logging utilities."""

import logging
import pytest
import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pintcheck.config.settings import HarnessConfig
from pintcheck.utils.logging_utils import (
    ColoredFormatter, setup_logging, get_logger, LoggingContext, silence_logger
)


@pytest.fixture
def restore_root_logger():
    """Restore root handlers and level after setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_console_only(self, restore_root_logger):
        setup_logging(level=logging.WARNING)
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_output(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "harness.log"
        setup_logging(level=logging.INFO, log_file=log_file, console_output=False)

        logging.getLogger("pintcheck.test").info("file message")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "file message" in log_file.read_text()

    def test_colored_console(self, restore_root_logger):
        setup_logging(colored_console=True)
        assert isinstance(restore_root_logger.handlers[0].formatter, ColoredFormatter)

    def test_from_config(self, restore_root_logger):
        config = HarnessConfig()
        config.logging.level = "ERROR"
        config.setup_logging()
        assert restore_root_logger.level == logging.ERROR


class TestColoredFormatter:
    """Test cases for ColoredFormatter."""

    def test_record_is_not_modified(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)

        text = formatter.format(record)

        assert "\033[33m" in text
        assert "careful" in text
        assert record.levelname == "WARNING"


class TestLoggerHelpers:
    """Test cases for logger helpers."""

    def test_get_logger_level(self):
        logger = get_logger("pintcheck.test_helpers", logging.DEBUG)
        assert logger.level == logging.DEBUG
        logger.setLevel(logging.NOTSET)

    def test_logging_context(self):
        logger = logging.getLogger("pintcheck.test_context")
        logger.setLevel(logging.INFO)
        with LoggingContext(logging.ERROR, "pintcheck.test_context") as active:
            assert active.level == logging.ERROR
        assert logger.level == logging.INFO
        logger.setLevel(logging.NOTSET)

    def test_silence_logger(self, caplog):
        with silence_logger("pintcheck.test_silence") as logger:
            logger.error("not shown")
        assert "not shown" not in caplog.text
        assert logger.level == logging.NOTSET
