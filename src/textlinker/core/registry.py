"""Dense integer identifiers for file paths.

A :class:`FileRegistry` is created once per graph build and handed to
every component that needs to turn paths into graph vertices.
"""

from __future__ import annotations

from pathlib import Path


class FileRegistry:
    """Append-only mapping between file paths and vertex identifiers.

    Identifiers start at 0 and are assigned in first-seen order. They are
    never reused or renumbered.

    Example:
        >>> registry = FileRegistry()
        >>> registry.identifier_for(Path("/notes/a.txt"))
        0
        >>> registry.identifier_for(Path("/notes/b.txt"))
        1
        >>> registry.path_for(1)
        PosixPath('/notes/b.txt')
    """

    def __init__(self) -> None:
        self._ids: dict[Path, int] = {}
        self._paths: list[Path] = []

    def identifier_for(self, path: Path) -> int:
        """Return the identifier of path, allocating the next one if unseen."""
        identifier = self._ids.get(path)
        if identifier is None:
            identifier = len(self._paths)
            self._ids[path] = identifier
            self._paths.append(path)
        return identifier

    def path_for(self, identifier: int) -> Path | None:
        """Return the path registered under identifier, or None."""
        if 0 <= identifier < len(self._paths):
            return self._paths[identifier]
        return None

    def paths(self) -> list[Path]:
        """Return all registered paths in identifier order."""
        return list(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._ids
