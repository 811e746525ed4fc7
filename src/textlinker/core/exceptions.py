"""Exceptions raised while building, analyzing and merging a text graph.

Every exception carries the process exit status the CLI uses for it, so
``main`` can turn any :class:`LinkerError` into a diagnostic and an exit
code without a lookup table.
"""

from __future__ import annotations

from pathlib import Path


class LinkerError(Exception):
    """Base class for all textlinker failures.

    Attributes:
        message: Human-readable description of the failure
        exit_code: Process exit status reported by the CLI
    """

    exit_code = 1

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class RootNotFoundError(LinkerError):
    """Raised when the root path is not an existing, readable directory.

    Example:
        >>> raise RootNotFoundError(Path("/no/such/dir"))
    """

    exit_code = 2

    def __init__(self, root: Path, details: str = ""):
        self.root = root
        detail_suffix = f": {details}" if details else ""
        super().__init__(f"Invalid root directory '{root}'{detail_suffix}")


class MissingRequiredFileError(LinkerError):
    """Raised when a requirement names a file that is not part of the tree.

    Also raised when a file that was enumerated can no longer be read.

    Attributes:
        requiring_file: File containing the requirement line, if known
        name: Raw name from the requirement line, if known
        resolved_path: Path the name resolved to

    Example:
        >>> raise MissingRequiredFileError(Path("/r/c.txt"), Path("/r/a.txt"), "c")
    """

    exit_code = 3

    def __init__(
        self,
        resolved_path: Path,
        requiring_file: Path | None = None,
        name: str | None = None,
        details: str = "",
    ):
        self.resolved_path = resolved_path
        self.requiring_file = requiring_file
        self.name = name

        if requiring_file is not None:
            message = (
                f"Required file '{name}' in {requiring_file} "
                f"does not exist: {resolved_path}"
            )
        else:
            message = f"Cannot read file: {resolved_path}"
        if details:
            message = f"{message} ({details})"
        super().__init__(message)


class CircularDependencyError(LinkerError):
    """Raised when the require graph contains a cycle.

    Attributes:
        cycle: Paths forming one cycle, first path repeated at the end
        dropped: Files no traversal seed could reach

    Example:
        >>> cycle = [Path("a.txt"), Path("b.txt"), Path("a.txt")]
        >>> raise CircularDependencyError(cycle)
    """

    exit_code = 4

    def __init__(self, cycle: list[Path], dropped: list[Path] | None = None):
        self.cycle = cycle
        self.dropped = dropped or []

        if cycle:
            chain = " -> ".join(path.name for path in cycle)
            message = f"Circular dependency detected: {chain}"
        else:
            message = "Circular dependency detected"
        if self.dropped:
            message += f" ({len(self.dropped)} file(s) unreachable)"
        super().__init__(message)


class OutputWriteError(LinkerError):
    """Raised when the merged artifact cannot be created or written."""

    exit_code = 5

    def __init__(self, output_path: Path, details: str = ""):
        self.output_path = output_path
        detail_suffix = f": {details}" if details else ""
        super().__init__(f"Cannot write output file {output_path}{detail_suffix}")


class ConfigError(LinkerError):
    """Raised when a configuration file cannot be loaded or is invalid."""

    exit_code = 6
