"""Shared fixtures for graph building, analysis and merging tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from textlinker.core.config import LinkerConfig
from textlinker.core.dependency_graph import DependencyGraph, GraphBuilder


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def create_test_file(directory: Path, name: str, content: str = "") -> Path:
    """Create a test file with the given name and content."""
    file_path = directory / name
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(textwrap.dedent(content), encoding="utf-8")
    return file_path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a factory that writes ``{relative_name: content}`` under a root."""
    root = tmp_path / "root"
    root.mkdir()

    def _make(files: dict[str, str]) -> Path:
        for name, content in files.items():
            create_test_file(root, name, content)
        return root

    return _make


@pytest.fixture
def build(make_tree) -> Callable[[dict[str, str]], DependencyGraph]:
    """Return a factory that writes a tree and builds its graph."""
    def _build(files: dict[str, str]) -> DependencyGraph:
        return GraphBuilder(LinkerConfig()).build(make_tree(files))

    return _build


@pytest.fixture
def chain_files() -> dict[str, str]:
    """a requires b, b requires c."""
    return {
        "a.txt": "require b\nalpha\n",
        "b.txt": "require c\nbeta\n",
        "c.txt": "gamma\n",
    }


@pytest.fixture
def disjoint_files() -> dict[str, str]:
    """Two independent chains: a -> b and x -> y."""
    return {
        "a.txt": "require b\n",
        "b.txt": "bee\n",
        "x.txt": "require y\n",
        "y.txt": "why\n",
    }


@pytest.fixture
def cycle_files() -> dict[str, str]:
    """a and b require each other."""
    return {
        "a.txt": "require b\n",
        "b.txt": "require a\n",
    }
