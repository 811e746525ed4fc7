"""
Utility modules for file discovery and logging.

This package provides:
- Path utilities for normalization, validation and recursive discovery
- Logging infrastructure with file and console output

Examples:
    >>> from textlinker.utils import normalize_path, find_files, setup_logger
    >>> logger = setup_logger("textlinker")
    >>> files = find_files(normalize_path("~/notes"), ".txt")
"""

from .path_utils import (
    # Type alias
    PathLike,
    # Path normalization
    normalize_path,
    get_relative_path,
    # Directory operations
    ensure_directory,
    find_files,
    # Path validation
    is_within,
    is_writable,
    is_readable_directory,
    # Name handling
    ensure_extension,
)

from .logger import (
    # Logger setup
    setup_logger,
    get_logger,
    set_log_level,
    # Handler management
    add_file_handler,
    add_console_handler,
    # Constants
    VALID_LOG_LEVELS,
)

__all__ = [
    "PathLike",
    "normalize_path",
    "get_relative_path",
    "ensure_directory",
    "find_files",
    "is_within",
    "is_writable",
    "is_readable_directory",
    "ensure_extension",
    "setup_logger",
    "get_logger",
    "set_log_level",
    "add_file_handler",
    "add_console_handler",
    "VALID_LOG_LEVELS",
]
