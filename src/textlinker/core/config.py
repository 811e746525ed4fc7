"""Configuration data model for a link run.

This module defines the LinkerConfig dataclass that controls which files
take part in the graph, how requirement lines are recognized, and where
the merged artifact and logs go. Configurations can be saved to and
loaded from JSON files.

Example:
    >>> config = LinkerConfig(extension=".md", output_name="Book.md")
    >>> config.validate()
    >>> LinkerConfig.save(config, Path("linker.json"))
    >>> LinkerConfig.load(Path("linker.json")).output_name
    'Book.md'
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from textlinker.utils.logger import VALID_LOG_LEVELS, get_logger
from textlinker.utils.path_utils import ensure_directory

LOGGER_NAME = "textlinker.core.config"

DEFAULT_EXTENSION = ".txt"
DEFAULT_REQUIRE_PREFIX = "require "
DEFAULT_OUTPUT_NAME = "Result.txt"


@dataclass
class LinkerConfig:
    """Settings for one graph build and merge.

    Attributes:
        extension: Suffix of participating files, also appended to
            required names when resolving them
        require_prefix: Literal line prefix that marks a requirement
        output_name: File name of the merged artifact, created in the
            current working directory
        encoding: Text encoding for reading sources and writing output
        log_level: Console log level
        log_file: Optional path of a rotating debug log
    """

    extension: str = DEFAULT_EXTENSION
    require_prefix: str = DEFAULT_REQUIRE_PREFIX
    output_name: str = DEFAULT_OUTPUT_NAME
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If any validation check fails
        """
        if not self.extension.startswith(".") or len(self.extension) < 2:
            raise ValueError(
                f"Invalid extension: {self.extension!r}. Expected a suffix like '.txt'"
            )

        if not self.require_prefix.strip():
            raise ValueError("Option 'require_prefix' must not be blank")

        if not self.output_name or Path(self.output_name).name != self.output_name:
            raise ValueError(
                f"Invalid output_name: {self.output_name!r}. Expected a bare file name"
            )

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Expected one of {VALID_LOG_LEVELS}"
            )

        get_logger(LOGGER_NAME).debug("Configuration validated successfully")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for JSON serialization."""
        return {
            "extension": self.extension,
            "require_prefix": self.require_prefix,
            "output_name": self.output_name,
            "encoding": self.encoding,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LinkerConfig:
        """Create configuration from dictionary.

        Missing keys fall back to the defaults. Unknown keys are rejected.

        Raises:
            ValueError: If data contains unknown keys
        """
        known = set(cls().to_dict())
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        defaults = cls()
        return cls(
            extension=data.get("extension", defaults.extension),
            require_prefix=data.get("require_prefix", defaults.require_prefix),
            output_name=data.get("output_name", defaults.output_name),
            encoding=data.get("encoding", defaults.encoding),
            log_level=data.get("log_level", defaults.log_level),
            log_file=data.get("log_file", defaults.log_file),
        )

    @staticmethod
    def save(config: LinkerConfig, file_path: Path) -> None:
        """Save a configuration to a JSON file.

        Raises:
            ValueError: If configuration validation fails
            OSError: If file write operation fails
        """
        config.validate()
        ensure_directory(file_path.parent)

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)

        get_logger(LOGGER_NAME).debug(f"Configuration saved to {file_path}")

    @staticmethod
    def load(file_path: Path) -> LinkerConfig:
        """Load and validate a configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If JSON is invalid or validation fails
        """
        if not file_path.exists():
            get_logger(LOGGER_NAME).error(f"Configuration file not found: {file_path}")
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            get_logger(LOGGER_NAME).error(f"Invalid JSON in configuration file {file_path}: {e}")
            raise ValueError(f"Invalid JSON format in configuration file: {e}")

        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")

        config = LinkerConfig.from_dict(data)
        config.validate()

        get_logger(LOGGER_NAME).debug(f"Configuration loaded from {file_path}")
        return config
