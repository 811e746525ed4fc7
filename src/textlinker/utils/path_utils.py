"""
Path utilities for locating and validating text sources on disk.

This module provides path normalization, permission checks and the
recursive file discovery used to enumerate every source file under a
root directory. All functions use pathlib.Path.

Examples:
    >>> from textlinker.utils.path_utils import normalize_path, find_files
    >>> root = normalize_path("~/notes")
    >>> files = find_files(root, ".txt")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

# Type alias for path-like objects
PathLike = Union[str, Path]


def normalize_path(path: PathLike) -> Path:
    """
    Convert a string or Path object to a normalized absolute Path.

    Handles home expansion (~) and resolves relative segments, so the
    same file always maps to the same Path regardless of how it was
    spelled.

    Args:
        path: A file system path as string or Path object.

    Returns:
        Normalized absolute Path object.

    Raises:
        ValueError: If path is empty or None.

    Examples:
        >>> normalize_path("~/notes/intro.txt")
        PosixPath('/home/user/notes/intro.txt')

        >>> normalize_path("/root/docs/../docs/a.txt")
        PosixPath('/root/docs/a.txt')
    """
    if path is None or (isinstance(path, str) and not path.strip()):
        raise ValueError("Path cannot be None or empty")

    return Path(path).expanduser().resolve()


def ensure_directory(path: Path) -> Path:
    """
    Create directory if it doesn't exist, return Path.

    Args:
        path: Directory path to create.

    Returns:
        The directory Path object.

    Raises:
        OSError: If directory creation fails.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_relative_path(path: Path, base: Path) -> Path:
    """
    Get relative path from base directory.

    Examples:
        >>> get_relative_path(Path("/notes/part/a.txt"), Path("/notes"))
        PosixPath('part/a.txt')
    """
    return path.relative_to(base)


def is_within(path: Path, base: Path) -> bool:
    """
    Check whether path lives inside base once both are resolved.

    Args:
        path: Path to validate.
        base: Directory that should contain the path.

    Returns:
        True if path is base itself or below it, False otherwise.

    Examples:
        >>> is_within(Path("/notes/part/a.txt"), Path("/notes"))
        True
        >>> is_within(Path("/etc/passwd"), Path("/notes"))
        False
    """
    try:
        path.resolve().relative_to(base.resolve())
        return True
    except (ValueError, OSError):
        return False


def is_writable(path: Path) -> bool:
    """Check if path exists and has write permissions."""
    return path.exists() and os.access(path, os.W_OK)


def is_readable_directory(path: Path) -> bool:
    """
    Check if path is an existing directory that can be listed.

    Examples:
        >>> is_readable_directory(Path("/tmp"))
        True
        >>> is_readable_directory(Path("/tmp/missing"))
        False
    """
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)


def ensure_extension(name: str, ext: str) -> str:
    """
    Append ext to a logical file name.

    The extension is always appended, even if the name already has a
    suffix, so ``"notes.v2"`` becomes ``"notes.v2.txt"``.

    Args:
        name: Logical name, possibly containing ``/`` separators.
        ext: Extension with or without leading dot.

    Returns:
        The name with the extension appended.

    Examples:
        >>> ensure_extension("chapters/intro", ".txt")
        'chapters/intro.txt'
        >>> ensure_extension("intro", "txt")
        'intro.txt'
    """
    if not ext.startswith('.'):
        ext = '.' + ext
    return f"{name}{ext}"


def find_files(directory: Path, extension: str) -> list[Path]:
    """
    Recursively collect files with the given extension.

    Files of a directory are listed before the contents of its
    subdirectories; both are visited in sorted name order. Matching is
    case-sensitive on the full suffix. Symlinked directories are not
    followed.

    Args:
        directory: Directory to scan.
        extension: Extension to match, including the leading dot.

    Returns:
        Paths of all matching files, in discovery order.

    Raises:
        OSError: If a directory cannot be listed.

    Examples:
        >>> find_files(Path("/notes"), ".txt")
        [PosixPath('/notes/a.txt'), PosixPath('/notes/part/b.txt')]
    """
    files: list[Path] = []
    subdirectories: list[Path] = []

    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if not entry.is_symlink():
                subdirectories.append(entry)
        elif entry.is_file() and entry.name.endswith(extension):
            files.append(entry)

    for subdirectory in subdirectories:
        files.extend(find_files(subdirectory, extension))

    return files
