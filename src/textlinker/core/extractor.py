"""Requirement-line parsing and content reading for single files.

A requirement line starts with the configured prefix (``"require "`` by
default); the rest of the line names another file relative to the root,
without its extension::

    require chapters/intro

resolves to ``<root>/chapters/intro.txt``. A name wrapped in one pair of
matching quotes (``require 'chapters/intro'``) resolves the same way.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from textlinker.core.config import LinkerConfig
from textlinker.core.exceptions import MissingRequiredFileError
from textlinker.core.registry import FileRegistry
from textlinker.utils.logger import get_logger
from textlinker.utils.path_utils import ensure_extension, normalize_path

# Opening -> closing quote characters accepted around a required name
QUOTE_PAIRS = {
    "'": "'",
    '"': '"',
}


def strip_quotes(name: str) -> str:
    """Remove one pair of matching surrounding quotes, if present.

    Examples:
        >>> strip_quotes("'chapters/intro'")
        'chapters/intro'
        >>> strip_quotes("intro")
        'intro'
    """
    if len(name) >= 2 and QUOTE_PAIRS.get(name[0]) == name[-1]:
        return name[1:-1]
    return name


class DependencyExtractor:
    """Reads source files and resolves the files they require.

    Attributes:
        root_directory: Directory required names are relative to
        registry: Shared registry used to turn resolved paths into ids
        config: Active configuration (extension, prefix, encoding)

    Example:
        >>> extractor = DependencyExtractor(Path("/notes"), FileRegistry())
        >>> extractor.required_names(Path("/notes/a.txt"))
        ['b']
        >>> extractor.required_paths(Path("/notes/a.txt"))
        [0]
    """

    def __init__(
        self,
        root_directory: Path,
        registry: FileRegistry,
        config: LinkerConfig | None = None,
    ) -> None:
        self.root_directory = normalize_path(root_directory)
        self.registry = registry
        self.config = config or LinkerConfig()
        self._logger = get_logger("textlinker.core.extractor")

    def _read_lines(self, path: Path) -> Iterator[str]:
        """Yield the lines of path without their line terminators.

        Raises:
            MissingRequiredFileError: If the file cannot be opened or decoded
        """
        try:
            with open(path, "r", encoding=self.config.encoding) as handle:
                for line in handle:
                    yield line.rstrip("\n")
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error(f"Cannot read {path}: {e}")
            raise MissingRequiredFileError(path, details=str(e)) from e

    def parse_requirement(self, line: str) -> str | None:
        """Return the required name on line, or None for ordinary lines."""
        prefix = self.config.require_prefix
        if not line.startswith(prefix):
            return None
        return strip_quotes(line[len(prefix):].strip())

    def resolve_name(self, name: str) -> Path:
        """Turn a required name into the absolute path of its file."""
        return normalize_path(
            self.root_directory / ensure_extension(name, self.config.extension)
        )

    def required_names(self, path: Path) -> list[str]:
        """Return the raw names required by path, in line order."""
        names = []
        for line in self._read_lines(path):
            name = self.parse_requirement(line)
            if name is not None:
                names.append(name)
        return names

    def required_files(self, path: Path) -> list[tuple[str, Path]]:
        """Return ``(name, resolved_path)`` pairs for every requirement of path."""
        return [(name, self.resolve_name(name)) for name in self.required_names(path)]

    def required_paths(self, path: Path) -> list[int]:
        """Return the identifiers of the files required by path.

        Resolved paths are registered in the shared registry, so a name
        that points outside the enumerated tree receives a fresh id.
        """
        identifiers = [
            self.registry.identifier_for(resolved)
            for _, resolved in self.required_files(path)
        ]
        self._logger.debug(f"{path.name}: {len(identifiers)} requirement(s)")
        return identifiers

    def contents(self, path: Path) -> str:
        """Return the full text of path, every line terminated by ``\\n``.

        Raises:
            MissingRequiredFileError: If the file cannot be read
        """
        return "".join(f"{line}\n" for line in self._read_lines(path))
