"""
Logging infrastructure for textlinker.

This module provides configurable logging with console and file output,
log rotation, and hierarchical logger management. Library modules ask
for ``textlinker.core.<module>`` loggers and inherit the handlers the
CLI installs on the ``textlinker`` logger.

Examples:
    >>> from textlinker.utils.logger import setup_logger
    >>> logger = setup_logger("textlinker", level="DEBUG", log_file=Path("logs/link.log"))
    >>> logger.info("Linking started")
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .path_utils import ensure_directory

# Valid log levels
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Default log format strings
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation settings for file logs
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def _level_value(level: str) -> int:
    """Translate a level name into its logging constant."""
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LOG_LEVELS}")
    return getattr(logging, level.upper())


def _is_console_handler(handler: logging.Handler) -> bool:
    return (
        isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.FileHandler)
    )


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Path | None = None
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Creates a logger with console output and optional file output.
    Calling it again for the same name updates the level but does not
    stack extra handlers.

    Args:
        name: Logger name (typically "textlinker").
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If provided, enables file logging.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If level is not a valid log level.

    Note:
        File logs use detailed format and always record DEBUG, console
        logs use simple format at the requested level.
    """
    level_value = _level_value(level)

    logger = logging.getLogger(name)
    logger.setLevel(min(level_value, logging.DEBUG) if log_file else level_value)

    console_handlers = [h for h in logger.handlers if _is_console_handler(h)]
    has_file_handler = any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )

    if console_handlers:
        for handler in console_handlers:
            handler.setLevel(level_value)
    else:
        add_console_handler(logger, level)

    if log_file is not None and not has_file_handler:
        add_file_handler(logger, log_file, level="DEBUG")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a logger, creating a default one when nothing is configured.

    If this logger or one of its ancestors already has handlers the
    logger is returned as is and propagation takes care of output.
    Otherwise a console logger at INFO level is set up.

    Examples:
        >>> logger = get_logger("textlinker.core.analyzer")
        >>> logger.debug("Seed a.txt")
    """
    logger = logging.getLogger(name)

    if logger.hasHandlers():
        return logger

    return setup_logger(name)


def set_log_level(logger: logging.Logger, level: str) -> None:
    """
    Change logging level dynamically.

    Raises:
        ValueError: If level is not valid.
    """
    logger.setLevel(_level_value(level))


def add_file_handler(
    logger: logging.Logger,
    log_file: Path,
    level: str = "DEBUG"
) -> None:
    """
    Add rotating file output handler to logger.

    Creates the log directory if it doesn't exist.

    Args:
        logger: Logger instance to modify.
        log_file: Path to log file.
        level: Logging level for file handler.

    Raises:
        ValueError: If level is not valid.
        OSError: If log directory cannot be created.
    """
    level_value = _level_value(level)

    ensure_directory(log_file.parent)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(level_value)
    file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(file_handler)


def add_console_handler(logger: logging.Logger, level: str = "INFO") -> None:
    """
    Add console output handler to logger.

    Console records go to stderr so they never mix with the dependency
    report printed on stdout.

    Raises:
        ValueError: If level is not valid.
    """
    level_value = _level_value(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level_value)
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    logger.addHandler(console_handler)
