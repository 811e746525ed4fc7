"""Core graph building, analysis and merging.

Classes:
    LinkerConfig: Configuration data model
    FileRegistry: Path <-> vertex identifier mapping
    DependencyExtractor: Parses requirement lines and reads file contents
    DependencyGraph: Require graph over a fixed set of files
    GraphBuilder: Scans a root directory and builds the graph
    GraphAnalyzer: Seeded DFS for components and cycle detection
    Assembler: Renders the report and merges file contents
"""

from textlinker.core.analyzer import AnalysisResult, GraphAnalyzer, VertexColor
from textlinker.core.assembler import Assembler, WriteResult
from textlinker.core.config import LinkerConfig
from textlinker.core.dependency_graph import DependencyGraph, GraphBuilder
from textlinker.core.exceptions import (
    CircularDependencyError,
    ConfigError,
    LinkerError,
    MissingRequiredFileError,
    OutputWriteError,
    RootNotFoundError,
)
from textlinker.core.extractor import DependencyExtractor
from textlinker.core.registry import FileRegistry

__all__ = [
    "LinkerConfig",
    "FileRegistry",
    "DependencyExtractor",
    "DependencyGraph",
    "GraphBuilder",
    "GraphAnalyzer",
    "AnalysisResult",
    "VertexColor",
    "Assembler",
    "WriteResult",
    "LinkerError",
    "RootNotFoundError",
    "MissingRequiredFileError",
    "CircularDependencyError",
    "OutputWriteError",
    "ConfigError",
]
