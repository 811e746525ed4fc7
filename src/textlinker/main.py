"""
Command line entry point for textlinker.

Scans a root directory for text files, checks their ``require`` lines
for missing files and cycles, prints the files in dependency order and
merges their contents into a single artifact.

Example:
    Run from the command line:
    $ textlinker ~/notes
    $ python -m textlinker ~/notes --output build/notes.txt --relative

Exit status:
    0 success, 2 invalid root, 3 missing required file, 4 cyclic
    dependency, 5 output write failure, 6 invalid configuration file.
"""

from pathlib import Path
from typing import Optional

import typer

from textlinker import __version__
from textlinker.core.analyzer import GraphAnalyzer
from textlinker.core.assembler import Assembler
from textlinker.core.config import LinkerConfig
from textlinker.core.dependency_graph import GraphBuilder
from textlinker.core.exceptions import ConfigError, LinkerError, OutputWriteError
from textlinker.core.extractor import DependencyExtractor
from textlinker.utils.logger import setup_logger

app = typer.Typer(
    name="textlinker",
    help="Merge text files in the order given by their 'require' lines.",
    add_completion=False,
)

REPORT_HEADER = "Files sorted by dependencies (components are separated by a blank line):"


def load_config(config_file: Optional[Path]) -> LinkerConfig:
    """Return the configuration from config_file, or the defaults.

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    if config_file is None:
        return LinkerConfig()
    try:
        return LinkerConfig.load(config_file)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Invalid configuration file {config_file}: {e}") from e


def run(
    root: str,
    config: LinkerConfig,
    output: Optional[Path] = None,
    relative: bool = False,
) -> Path:
    """Build, check, report and merge.

    Returns:
        Path of the merged artifact

    Raises:
        LinkerError: On any failure, carrying the exit status to use
    """
    graph = GraphBuilder(config).build(root)

    analyzer = GraphAnalyzer(graph)
    analyzer.check_acyclic()
    typer.echo("No cycles found in dependencies.")

    assembler = Assembler(DependencyExtractor(graph.root, graph.registry, config))
    typer.echo(REPORT_HEADER)
    typer.echo()
    typer.echo(
        assembler.render_report(
            analyzer.list_components(),
            relative_to=graph.root if relative else None,
        ),
        nl=False,
    )

    destination = output if output is not None else Path.cwd() / config.output_name
    result = assembler.concatenate(analyzer.list_components(), destination)
    if not result.success:
        raise OutputWriteError(result.output_path, result.error or "")

    typer.echo(f"File contents merged into '{result.output_path.name}'")
    return result.output_path


@app.command()
def link(
    root: Optional[str] = typer.Argument(
        None, help="Root directory to scan. Prompted for when omitted."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Merged file path (default: Result.txt in the current directory)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON configuration file"
    ),
    relative: bool = typer.Option(
        False, "--relative", help="Show report paths relative to the root"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write a debug log here"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Resolve 'require' lines under ROOT and merge the files in dependency order.

    Examples:
        textlinker ~/notes
        textlinker ~/notes -o book.txt --relative
    """
    if version:
        typer.echo(f"textlinker {__version__}")
        raise typer.Exit(0)

    # Parent handler must exist before config.py asks for its logger
    setup_logger("textlinker", level="DEBUG" if verbose else "WARNING")
    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(e.exit_code)

    if log_file is None and config.log_file:
        log_file = Path(config.log_file)
    logger = setup_logger(
        "textlinker",
        level="DEBUG" if verbose else config.log_level,
        log_file=log_file,
    )

    if root is None:
        root = typer.prompt("Enter the path to the root directory")

    try:
        run(root, config, output=output, relative=relative)
    except LinkerError as e:
        logger.debug(f"Run aborted: {e.message}")
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(e.exit_code)


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
