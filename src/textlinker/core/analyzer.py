"""Topological ordering, component grouping and cycle detection.

Traversal seeds are the files nothing requires. From every seed a
depth-first search runs in post-order, so each file is emitted after all
the files it requires; the emitted files form one component. Files that
no seed reaches can only sit in or behind a cycle, which is how cycles
are reported for compatibility. The traversal also notices back edges
directly and records the cycle they close.

Example:
    >>> analyzer = GraphAnalyzer(graph)
    >>> analyzer.list_components()
    [[PosixPath('/notes/c.txt'), PosixPath('/notes/b.txt'), PosixPath('/notes/a.txt')]]
    >>> analyzer.has_loops()
    False
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Iterator

from textlinker.core.dependency_graph import DependencyGraph
from textlinker.core.exceptions import CircularDependencyError
from textlinker.utils.logger import get_logger


class VertexColor(IntEnum):
    """Traversal state of a single vertex."""

    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


@dataclass
class AnalysisResult:
    """Outcome of one full seeding pass over the graph.

    Attributes:
        components: Dependency-first ordered file groups, in seed order
        dropped: Files no seed reached, in identifier order
        cycle: One cycle (first path repeated at the end), if any was found
        back_edge_found: Whether the traversal itself ran into a cycle
    """
    components: list[list[Path]] = field(default_factory=list)
    dropped: list[Path] = field(default_factory=list)
    cycle: list[Path] | None = None
    back_edge_found: bool = False

    @property
    def file_total(self) -> int:
        return sum(len(component) for component in self.components)

    @property
    def has_cycles(self) -> bool:
        return self.back_edge_found or bool(self.dropped)


class GraphAnalyzer:
    """Runs the seeded depth-first traversal over a dependency graph.

    Color state lives only inside a single call, so every public method
    recomputes from scratch and repeated calls agree exactly.

    Attributes:
        graph: The graph to analyze; never modified
    """

    def __init__(self, graph: DependencyGraph) -> None:
        self.graph = graph
        self._logger = get_logger("textlinker.core.analyzer")

    def _neighbors(self, vertex: int) -> Iterator[int]:
        return iter(sorted(self.graph.adjacency[vertex]))

    def _postorder(
        self,
        seed: int,
        color: list[VertexColor],
        cycles: list[list[int]],
    ) -> list[int]:
        """Depth-first post-order from seed.

        Vertices already DONE are skipped. Meeting an IN_PROGRESS vertex
        closes a cycle: it is appended to cycles and the edge is not
        followed.
        """
        order: list[int] = []
        color[seed] = VertexColor.IN_PROGRESS
        stack = [(seed, self._neighbors(seed))]

        while stack:
            vertex, neighbors = stack[-1]
            for neighbor in neighbors:
                if color[neighbor] == VertexColor.DONE:
                    continue
                if color[neighbor] == VertexColor.IN_PROGRESS:
                    on_stack = [v for v, _ in stack]
                    start = on_stack.index(neighbor)
                    cycles.append(on_stack[start:] + [neighbor])
                    continue
                color[neighbor] = VertexColor.IN_PROGRESS
                stack.append((neighbor, self._neighbors(neighbor)))
                break
            else:
                stack.pop()
                color[vertex] = VertexColor.DONE
                order.append(vertex)

        return order

    def _find_cycle(self, vertices: list[int]) -> list[int] | None:
        """Find one cycle among vertices using a color DFS."""
        color = [VertexColor.UNVISITED] * self.graph.file_count
        cycles: list[list[int]] = []
        for vertex in vertices:
            if color[vertex] == VertexColor.UNVISITED:
                self._postorder(vertex, color, cycles)
                if cycles:
                    return cycles[0]
        return None

    def is_seed(self, vertex: int) -> bool:
        """A vertex seeds a traversal iff no file requires it."""
        return not self.graph.has_incoming_edge(vertex)

    def analyze(self) -> AnalysisResult:
        """Run one full seeding pass and collect components and cycles."""
        color = [VertexColor.UNVISITED] * self.graph.file_count
        cycles: list[list[int]] = []
        result = AnalysisResult()

        for vertex in self.graph.vertices():
            if self.is_seed(vertex) and color[vertex] == VertexColor.UNVISITED:
                order = self._postorder(vertex, color, cycles)
                result.components.append([self.graph.path_for(v) for v in order])
                self._logger.debug(
                    f"Seed {self.graph.path_for(vertex).name}: "
                    f"component of {len(order)} file(s)"
                )

        unreached = [v for v in self.graph.vertices() if color[v] == VertexColor.UNVISITED]
        result.dropped = [self.graph.path_for(v) for v in unreached]
        result.back_edge_found = bool(cycles)

        cycle = cycles[0] if cycles else self._find_cycle(unreached)
        if cycle is not None:
            result.cycle = [self.graph.path_for(v) for v in cycle]

        if result.has_cycles:
            chain = " -> ".join(p.name for p in result.cycle or [])
            self._logger.warning(
                f"Cycle detected: {chain or 'unknown'}; "
                f"{len(result.dropped)} file(s) unreachable"
            )
        else:
            self._logger.debug(
                f"{len(result.components)} component(s), {result.file_total} file(s) ordered"
            )

        return result

    def list_components(self) -> list[list[Path]]:
        """Return the dependency-first file groups.

        Files reachable only through a cycle are silently left out.

        Raises:
            CircularDependencyError: If the traversal itself ran into a cycle
        """
        result = self.analyze()
        if result.back_edge_found:
            raise CircularDependencyError(result.cycle or [], result.dropped)
        return result.components

    def has_loops(self) -> bool:
        """Check whether the require graph contains a cycle."""
        return self.analyze().has_cycles

    def check_acyclic(self) -> None:
        """Raise if the require graph contains a cycle.

        Raises:
            CircularDependencyError: With the cycle found and the dropped files
        """
        result = self.analyze()
        if result.has_cycles:
            raise CircularDependencyError(result.cycle or [], result.dropped)
