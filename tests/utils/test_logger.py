"""
Tests for logger module.

Tests cover logger setup, handler management, log levels,
formatting, and file rotation settings.
"""

import logging
import logging.handlers

import pytest

from textlinker.utils.logger import (
    LOG_BACKUP_COUNT,
    MAX_LOG_BYTES,
    VALID_LOG_LEVELS,
    add_console_handler,
    add_file_handler,
    get_logger,
    set_log_level,
    setup_logger,
)


@pytest.fixture
def log_file_path(tmp_path):
    """Path of a log file inside a directory that does not exist yet."""
    return tmp_path / "logs" / "link.log"


class TestLoggerSetup:
    """Test logger creation and configuration."""

    def test_setup_logger_creates_logger(self):
        logger = setup_logger("textlinker.test.setup")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "textlinker.test.setup"

    def test_setup_logger_default_level(self):
        logger = setup_logger("textlinker.test.setup")
        assert logger.level == logging.INFO

    def test_setup_logger_custom_level(self):
        logger = setup_logger("textlinker.test.setup", level="warning")
        assert logger.level == logging.WARNING

    def test_setup_logger_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logger("textlinker.test.setup", level="LOUD")

    def test_setup_logger_with_file(self, log_file_path):
        logger = setup_logger("textlinker.test.setup", level="ERROR", log_file=log_file_path)

        assert len(logger.handlers) == 2
        assert log_file_path.exists()
        # file logs record everything, console keeps the requested level
        assert logger.level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logger("textlinker.test.setup", level="INFO")
        logger = setup_logger("textlinker.test.setup", level="DEBUG")

        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG

    def test_repeated_setup_with_file_adds_one_file_handler(self, log_file_path):
        setup_logger("textlinker.test.setup", log_file=log_file_path)
        logger = setup_logger("textlinker.test.setup", log_file=log_file_path)

        file_handlers = [
            h for h in logger.handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1


class TestGetLogger:
    """Test logger retrieval and inheritance."""

    def test_child_of_configured_logger_is_left_alone(self):
        setup_logger("textlinker.test.parent", level="DEBUG")
        child = get_logger("textlinker.test.parent.child")

        assert child.handlers == []
        assert child.getEffectiveLevel() == logging.DEBUG

    def test_unconfigured_logger_gets_console_handler(self, monkeypatch):
        # detach from the root logger, which pytest equips with capture handlers
        monkeypatch.setattr(logging.getLogger("textlinker.test.lonely"), "propagate", False)
        logger = get_logger("textlinker.test.lonely")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_same_instance_returned(self):
        assert get_logger("textlinker.test.same") is get_logger("textlinker.test.same")


class TestHandlers:
    """Test individual handler helpers."""

    def test_set_log_level(self):
        logger = setup_logger("textlinker.test.level")
        set_log_level(logger, "CRITICAL")
        assert logger.level == logging.CRITICAL

    def test_set_log_level_invalid(self):
        logger = setup_logger("textlinker.test.level")
        with pytest.raises(ValueError):
            set_log_level(logger, "verbose")

    def test_add_file_handler_rotation_and_format(self, log_file_path):
        logger = logging.getLogger("textlinker.test.file")
        logger.setLevel(logging.DEBUG)
        add_file_handler(logger, log_file_path)

        handler = logger.handlers[0]
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == MAX_LOG_BYTES
        assert handler.backupCount == LOG_BACKUP_COUNT

        logger.debug("edge a.txt -> b.txt")
        handler.flush()
        content = log_file_path.read_text(encoding="utf-8")
        assert "textlinker.test.file" in content
        assert "DEBUG" in content
        assert "edge a.txt -> b.txt" in content

    def test_console_handler_writes_to_stderr(self, capsys, monkeypatch):
        logger = logging.getLogger("textlinker.test.console")
        logger.setLevel(logging.DEBUG)
        monkeypatch.setattr(logger, "propagate", False)
        add_console_handler(logger, "WARNING")

        logger.info("hidden")
        logger.warning("shown")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "WARNING: shown" in captured.err
        assert "hidden" not in captured.err

    def test_valid_levels(self):
        assert VALID_LOG_LEVELS == ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
