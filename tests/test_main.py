"""End-to-end tests for the textlinker command line."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from textlinker import __version__
from textlinker.main import REPORT_HEADER, app

runner = CliRunner()


@pytest.fixture
def tree(tmp_path: Path):
    """Write a dict of relative path -> content under tmp_path/root."""
    def _tree(files: dict[str, str]) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root
    return _tree


@pytest.fixture
def chain_root(tree) -> Path:
    return tree({
        "a.txt": "require b\nalpha\n",
        "b.txt": "require c\nbeta\n",
        "c.txt": "gamma\n",
    })


class TestSuccessfulRun:

    def test_report_and_merged_output(self, chain_root: Path, tmp_path: Path) -> None:
        output = tmp_path / "merged.txt"

        result = runner.invoke(app, [str(chain_root), "--output", str(output)])

        assert result.exit_code == 0, result.output
        root = chain_root.resolve()
        assert result.output == (
            "No cycles found in dependencies.\n"
            f"{REPORT_HEADER}\n"
            "\n"
            f"{root / 'c.txt'}\n{root / 'b.txt'}\n{root / 'a.txt'}\n"
            "\n"
            "File contents merged into 'merged.txt'\n"
        )
        assert output.read_text(encoding="utf-8") == (
            "gamma\n\nrequire c\nbeta\n\nrequire b\nalpha\n\n"
        )

    def test_default_output_in_working_directory(
        self, chain_root: Path, tmp_path: Path, monkeypatch
    ) -> None:
        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)

        result = runner.invoke(app, [str(chain_root)])

        assert result.exit_code == 0, result.output
        assert (workdir / "Result.txt").read_text(encoding="utf-8").startswith("gamma\n")
        assert "File contents merged into 'Result.txt'" in result.output

    def test_root_prompted_when_omitted(self, chain_root: Path, tmp_path: Path) -> None:
        output = tmp_path / "merged.txt"

        result = runner.invoke(app, ["-o", str(output)], input=f"{chain_root}\n")

        assert result.exit_code == 0, result.output
        assert "Enter the path to the root directory" in result.output
        assert output.exists()

    def test_relative_report(self, tree, tmp_path: Path) -> None:
        root = tree({"a.txt": "require part/b\n", "part/b.txt": ""})

        result = runner.invoke(
            app, [str(root), "--relative", "-o", str(tmp_path / "out.txt")]
        )

        assert result.exit_code == 0, result.output
        assert f"\n{Path('part') / 'b.txt'}\na.txt\n\n" in result.output

    def test_components_separated_by_blank_line(self, tree, tmp_path: Path) -> None:
        root = tree({
            "a.txt": "require b\n",
            "b.txt": "",
            "x.txt": "require y\n",
            "y.txt": "",
        })

        result = runner.invoke(
            app, [str(root), "--relative", "-o", str(tmp_path / "out.txt")]
        )

        assert result.exit_code == 0, result.output
        assert "b.txt\na.txt\n\ny.txt\nx.txt\n\n" in result.output

    def test_empty_root_writes_empty_artifact(self, tree, tmp_path: Path) -> None:
        root = tree({})
        output = tmp_path / "out.txt"

        result = runner.invoke(app, [str(root), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == ""

    def test_config_file_changes_extension(self, tree, tmp_path: Path) -> None:
        root = tree({"a.md": "#include b\nA\n", "b.md": "B\n", "c.txt": "C\n"})
        config_path = tmp_path / "linker.json"
        config_path.write_text(
            json.dumps({"extension": ".md", "require_prefix": "#include "}),
            encoding="utf-8",
        )
        output = tmp_path / "book.md"

        result = runner.invoke(app, [str(root), "-c", str(config_path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == "B\n\n#include b\nA\n\n"

    def test_log_file(self, chain_root: Path, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "link.log"

        result = runner.invoke(
            app,
            [str(chain_root), "-o", str(tmp_path / "out.txt"), "--log-file", str(log_file)],
        )

        assert result.exit_code == 0, result.output
        assert "a.txt" in log_file.read_text(encoding="utf-8")

    def test_verbose_config_logging_goes_through_cli_logger(
        self, chain_root: Path, tmp_path: Path
    ) -> None:
        config_path = tmp_path / "linker.json"
        config_path.write_text(json.dumps({"log_level": "ERROR"}), encoding="utf-8")

        result = runner.invoke(
            app,
            [str(chain_root), "-c", str(config_path), "-o", str(tmp_path / "out.txt"), "-v"],
        )

        assert result.exit_code == 0, result.output
        assert result.output.count("Configuration loaded from") == 1
        assert logging.getLogger("textlinker.core.config").handlers == []

    def test_config_log_level_applies_after_loading(
        self, chain_root: Path, tmp_path: Path
    ) -> None:
        config_path = tmp_path / "linker.json"
        config_path.write_text(json.dumps({"log_level": "DEBUG"}), encoding="utf-8")

        result = runner.invoke(
            app, [str(chain_root), "-c", str(config_path), "-o", str(tmp_path / "out.txt")]
        )

        assert result.exit_code == 0, result.output
        assert "Added edge: a.txt -> b.txt" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"textlinker {__version__}"


class TestFailures:

    def test_cycle_exits_without_output(self, tree, tmp_path: Path) -> None:
        root = tree({"a.txt": "require b\n", "b.txt": "require a\n"})
        output = tmp_path / "out.txt"

        result = runner.invoke(app, [str(root), "-o", str(output)])

        assert result.exit_code == 4
        assert "Circular dependency detected" in result.output
        assert "No cycles found" not in result.output
        assert not output.exists()

    def test_cycle_behind_a_seed(self, tree, tmp_path: Path) -> None:
        root = tree({
            "a.txt": "require b\n",
            "b.txt": "require a\n",
            "start.txt": "require a\n",
        })
        output = tmp_path / "out.txt"

        result = runner.invoke(app, [str(root), "-o", str(output)])

        assert result.exit_code == 4
        assert not output.exists()

    def test_missing_required_file(self, tree, tmp_path: Path) -> None:
        root = tree({"a.txt": "require nope\n"})

        result = runner.invoke(app, [str(root), "-o", str(tmp_path / "out.txt")])

        assert result.exit_code == 3
        assert "Required file 'nope'" in result.output
        assert "nope.txt" in result.output

    def test_invalid_root(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing")])

        assert result.exit_code == 2
        assert "Invalid root directory" in result.output

    def test_output_is_a_directory(self, chain_root: Path, tmp_path: Path) -> None:
        target = tmp_path / "taken"
        target.mkdir()

        result = runner.invoke(app, [str(chain_root), "-o", str(target)])

        assert result.exit_code == 5
        assert "is a directory" in result.output

    def test_invalid_config_file(self, chain_root: Path, tmp_path: Path) -> None:
        config_path = tmp_path / "linker.json"
        config_path.write_text("{broken", encoding="utf-8")

        result = runner.invoke(app, [str(chain_root), "-c", str(config_path)])

        assert result.exit_code == 6
        assert "Invalid configuration file" in result.output

    def test_missing_config_file(self, chain_root: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(chain_root), "-c", str(tmp_path / "none.json")])
        assert result.exit_code == 6
