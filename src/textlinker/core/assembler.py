"""Report rendering and content merging for ordered components.

The merged artifact is written to a temporary file next to the
destination and renamed over it once every source has been copied, so a
failed run never leaves a half-written artifact behind.

Example::

    from pathlib import Path
    from textlinker.core.assembler import Assembler

    assembler = Assembler(extractor)
    print(assembler.render_report(components))
    result = assembler.concatenate(components, Path("Result.txt"))
    if result.success:
        print(f"{result.files_written} files merged into {result.output_path}")
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from textlinker.core.extractor import DependencyExtractor
from textlinker.utils.logger import get_logger
from textlinker.utils.path_utils import (
    get_relative_path,
    is_within,
    is_writable,
    normalize_path,
)


def _default_file_mode() -> int:
    """Mode a newly created regular file gets under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@dataclass
class WriteResult:
    """Result of writing the merged artifact.

    Attributes:
        success: Whether the write operation succeeded.
        output_path: Path the artifact was written to (or was meant to be).
        files_written: Number of source files copied into the artifact.
        bytes_written: Number of characters written.
        error: Human-readable error message if the write failed,
            otherwise ``None``.
    """

    success: bool
    output_path: Path
    files_written: int = 0
    bytes_written: int = 0
    error: str | None = None


class Assembler:
    """Prints and merges the components produced by the analyzer.

    Attributes:
        extractor: Used to read each file's contents
    """

    def __init__(self, extractor: DependencyExtractor) -> None:
        self.extractor = extractor
        self._logger = get_logger("textlinker.core.assembler")

    def render_report(
        self,
        components: list[list[Path]],
        relative_to: Path | None = None,
    ) -> str:
        """List every component's files, one per line.

        A blank line follows each component.

        Args:
            components: Ordered file groups
            relative_to: If given, paths under this directory are shown
                relative to it

        Returns:
            The report text
        """
        lines: list[str] = []
        for component in components:
            for path in component:
                if relative_to is not None and is_within(path, relative_to):
                    lines.append(str(get_relative_path(path, relative_to)))
                else:
                    lines.append(str(path))
            lines.append("")
        return "".join(f"{line}\n" for line in lines)

    def _validate_destination(self, destination: Path) -> str | None:
        """Return an error message if destination cannot be written."""
        if destination.is_dir():
            return f"Destination is a directory: {destination}"
        if destination.exists() and not is_writable(destination):
            return f"File is not writable: {destination}"
        parent = destination.parent
        if not parent.is_dir():
            return f"Parent directory does not exist: {parent}"
        if not is_writable(parent):
            return f"Parent directory is not writable: {parent}"
        return None

    def concatenate(self, components: list[list[Path]], destination: Path) -> WriteResult:
        """Write every file's contents, followed by a newline, in order.

        Args:
            components: Ordered file groups
            destination: Path of the merged artifact

        Returns:
            A :class:`WriteResult` describing the outcome. Failures to
            create or write the destination are reported here, not raised.

        Raises:
            MissingRequiredFileError: If a source file cannot be read
        """
        destination = normalize_path(destination)
        error = self._validate_destination(destination)
        if error is not None:
            self._logger.error(error)
            return WriteResult(success=False, output_path=destination, error=error)

        temp_path: str | None = None
        files_written = 0
        bytes_written = 0

        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding=self.extractor.config.encoding,
                delete=False,
                dir=str(destination.parent),
                prefix=f".{destination.stem}-",
                suffix=".tmp",
            ) as handle:
                temp_path = handle.name
                for component in components:
                    for path in component:
                        text = self.extractor.contents(path) + "\n"
                        handle.write(text)
                        files_written += 1
                        bytes_written += len(text)
                handle.flush()
                os.fsync(handle.fileno())

            # NamedTemporaryFile creates 0600 files
            if destination.exists():
                shutil.copymode(destination, temp_path)
            else:
                os.chmod(temp_path, _default_file_mode())
            shutil.move(temp_path, str(destination))
            temp_path = None
        except OSError as e:
            self._logger.error(f"Writing {destination} failed: {e}")
            return WriteResult(
                success=False,
                output_path=destination,
                files_written=files_written,
                bytes_written=bytes_written,
                error=str(e),
            )
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)

        self._logger.info(f"Merged {files_written} file(s) into {destination}")
        return WriteResult(
            success=True,
            output_path=destination,
            files_written=files_written,
            bytes_written=bytes_written,
        )
