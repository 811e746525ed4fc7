"""Dependency graph construction for a tree of text files.

This module enumerates every source file under a root directory, gives
each one a vertex identifier and records a directed edge from a file to
every file it requires.

Example:
    >>> from pathlib import Path
    >>> from textlinker.core.dependency_graph import GraphBuilder
    >>>
    >>> graph = GraphBuilder().build(Path("/notes"))
    >>> graph.file_count
    3
    >>> graph.get_dependencies(0)
    {1}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from textlinker.core.config import LinkerConfig
from textlinker.core.exceptions import MissingRequiredFileError, RootNotFoundError
from textlinker.core.extractor import DependencyExtractor
from textlinker.core.registry import FileRegistry
from textlinker.utils.logger import get_logger
from textlinker.utils.path_utils import (
    find_files,
    is_readable_directory,
    normalize_path,
)


# ============================================================================
# Data Structures
# ============================================================================


@dataclass
class DependencyGraph:
    """Directed require graph over a fixed set of files.

    Vertices are the identifiers ``0 .. file_count - 1`` handed out by the
    registry. An edge ``a -> b`` means file ``a`` requires file ``b``.

    Attributes:
        root: Absolute root directory the graph was built from
        registry: Identifier registry shared by the build
        file_count: Number of vertices, fixed before any edge is added
        adjacency: Forward adjacency (file -> files it requires)
        reverse_adjacency: Reverse adjacency (file -> files requiring it)

    Example:
        >>> graph = DependencyGraph.empty(Path("/notes"), FileRegistry(), 2)
        >>> graph.add_edge(0, 1)
        >>> graph.has_incoming_edge(1)
        True
    """
    root: Path
    registry: FileRegistry
    file_count: int
    adjacency: list[set[int]] = field(default_factory=list)
    reverse_adjacency: list[set[int]] = field(default_factory=list)

    @classmethod
    def empty(cls, root: Path, registry: FileRegistry, file_count: int) -> DependencyGraph:
        """Create a graph with file_count vertices and no edges."""
        return cls(
            root=root,
            registry=registry,
            file_count=file_count,
            adjacency=[set() for _ in range(file_count)],
            reverse_adjacency=[set() for _ in range(file_count)],
        )

    def _check_vertex(self, vertex: int) -> None:
        if not 0 <= vertex < self.file_count:
            raise IndexError(
                f"Vertex {vertex} out of range for graph of {self.file_count} files"
            )

    def add_edge(self, from_id: int, to_id: int) -> None:
        """Record that from_id requires to_id.

        Raises:
            IndexError: If either identifier is outside the graph
        """
        self._check_vertex(from_id)
        self._check_vertex(to_id)
        self.adjacency[from_id].add(to_id)
        self.reverse_adjacency[to_id].add(from_id)

    def vertices(self) -> range:
        """Return all vertex identifiers in order."""
        return range(self.file_count)

    def path_for(self, vertex: int) -> Path:
        """Return the file path of a vertex.

        Raises:
            IndexError: If the vertex is not part of the graph
        """
        self._check_vertex(vertex)
        path = self.registry.path_for(vertex)
        if path is None:
            raise IndexError(f"Vertex {vertex} has no registered path")
        return path

    def get_dependencies(self, vertex: int) -> set[int]:
        """Get the files a vertex requires."""
        self._check_vertex(vertex)
        return self.adjacency[vertex].copy()

    def get_dependents(self, vertex: int) -> set[int]:
        """Get the files requiring a vertex."""
        self._check_vertex(vertex)
        return self.reverse_adjacency[vertex].copy()

    def has_incoming_edge(self, vertex: int) -> bool:
        """Check whether any file, the vertex itself included, requires it."""
        return bool(self.get_dependents(vertex))

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the graph for debugging/logging.

        Returns:
            Dictionary representation of the graph
        """
        return {
            "root": str(self.root),
            "files": [str(path) for path in self.registry.paths()],
            "edges": [
                {"from": str(self.path_for(v)), "to": str(self.path_for(w))}
                for v in self.vertices()
                for w in sorted(self.adjacency[v])
            ],
            "file_count": self.file_count,
            "edge_count": self.edge_count,
        }


# ============================================================================
# Graph Builder
# ============================================================================


class GraphBuilder:
    """Builds a :class:`DependencyGraph` from a directory snapshot.

    Each call to :meth:`build` uses a fresh :class:`FileRegistry`, so
    repeated builds never share identifiers.

    Attributes:
        config: Active configuration (extension, prefix, encoding)

    Example:
        >>> builder = GraphBuilder(LinkerConfig(extension=".md"))
        >>> graph = builder.build(Path("/book"))
    """

    def __init__(self, config: LinkerConfig | None = None) -> None:
        self.config = config or LinkerConfig()
        self._logger = get_logger("textlinker.core.dependency_graph")

    def validate_root(self, root_directory: Path | str) -> Path:
        """Normalize the root and check it is a readable directory.

        Raises:
            RootNotFoundError: If the root is missing, not a directory, or
                cannot be listed
        """
        try:
            root = normalize_path(root_directory)
        except (ValueError, OSError) as e:
            raise RootNotFoundError(Path(str(root_directory)), str(e)) from e

        if not root.exists():
            self._logger.error(f"Root directory does not exist: {root}")
            raise RootNotFoundError(root, "no such directory")
        if not is_readable_directory(root):
            self._logger.error(f"Root is not a readable directory: {root}")
            raise RootNotFoundError(root, "not a readable directory")
        return root

    def enumerate_files(self, root: Path) -> list[Path]:
        """List the distinct participating files under root, in discovery order.

        Raises:
            RootNotFoundError: If a directory of the tree cannot be listed
        """
        try:
            found = find_files(root, self.config.extension)
        except OSError as e:
            self._logger.error(f"Cannot scan {root}: {e}")
            raise RootNotFoundError(root, str(e)) from e
        return list(dict.fromkeys(normalize_path(path) for path in found))

    def build(self, root_directory: Path | str) -> DependencyGraph:
        """Scan root_directory and build its require graph.

        Args:
            root_directory: Directory holding the source files

        Returns:
            The completed DependencyGraph

        Raises:
            RootNotFoundError: If the root cannot be scanned
            MissingRequiredFileError: If a requirement names a file that
                does not exist under the root
        """
        root = self.validate_root(root_directory)

        # Vertex count is fixed by a separate pass before any id is handed out
        file_count = len(self.enumerate_files(root))
        registry = FileRegistry()
        graph = DependencyGraph.empty(root, registry, file_count)
        extractor = DependencyExtractor(root, registry, self.config)

        files = self.enumerate_files(root)
        for path in files:
            registry.identifier_for(path)
        if len(registry) != file_count:
            raise RootNotFoundError(root, "directory contents changed during scan")

        self._logger.info(f"Building dependency graph for {file_count} files in {root}")

        for path in files:
            file_id = registry.identifier_for(path)
            for name, resolved in extractor.required_files(path):
                if not resolved.is_file():
                    self._logger.error(f"{path.name}: required file '{name}' not found")
                    raise MissingRequiredFileError(resolved, path, name)

                required_id = registry.identifier_for(resolved)
                if required_id >= file_count:
                    self._logger.error(
                        f"{path.name}: required file '{name}' is outside the scanned tree"
                    )
                    raise MissingRequiredFileError(
                        resolved, path, name, details="not under the root directory"
                    )

                graph.add_edge(file_id, required_id)
                self._logger.debug(f"Added edge: {path.name} -> {resolved.name}")

        self._logger.info(
            f"Dependency graph complete: {graph.file_count} files, "
            f"{graph.edge_count} edges"
        )
        self._logger.debug(f"Graph: {graph.to_dict()}")
        return graph
