"""
Writing extracted images to the output directory.

Each document gets its own counter, so numbering restarts at 1 for
every document. Existing files are replaced unless overwrite is off.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from docimages.errors import WriteError

from .base import ImageEntry, OutputPlan

logger = logging.getLogger(__name__)

# Upper bound on suffix probing when overwrite is disabled
MAX_UNIQUE_ATTEMPTS = 1000


@dataclass
class WriteResult:
    """Outcome of writing one document's images."""

    written: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.written)


def unique_path(path: Path) -> Path:
    """
    First free variant of a path: "name_1.ext", "name_2.ext", ...

    Raises:
        WriteError: If no free name is found within MAX_UNIQUE_ATTEMPTS
    """
    if not path.exists():
        return path

    stem, suffix = path.stem, path.suffix
    for counter in range(1, MAX_UNIQUE_ATTEMPTS + 1):
        candidate = path.with_name(f"{stem}_{counter}{suffix}")
        if not candidate.exists():
            return candidate

    raise WriteError(
        f"Could not find unique filename after {MAX_UNIQUE_ATTEMPTS} attempts for {stem}"
    )


def write_image(path: Path, data: bytes) -> None:
    """
    Write image bytes to a file, replacing any existing file.

    Raises:
        WriteError: If the file cannot be written
    """
    try:
        with open(path, "wb") as f:
            f.write(data)
    except (OSError, ValueError) as e:
        raise WriteError(f"Failed to write image data to {path}: {e}") from e


class ExtractionWriter:
    """Writes image entries into a flat output directory."""

    def __init__(self, output_dir: str | Path, *, overwrite: bool = True) -> None:
        """
        Initialize writer.

        Args:
            output_dir: Target directory, created on first write
            overwrite: Replace existing files; otherwise pick a free name
        """
        self.output_dir = Path(output_dir)
        self.overwrite = overwrite

    def ensure_output_dir(self) -> None:
        """
        Create the output directory if needed.

        Raises:
            WriteError: If the directory cannot be created
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"Failed to create output directory {self.output_dir}: {e}") from e

    def target_path(self, plan: OutputPlan, index: int, extension: str) -> Path:
        """Output path for the image at a 1-based position."""
        path = self.output_dir / plan.filename_for(index, extension)
        if self.overwrite:
            return path
        return unique_path(path)

    def write(
        self,
        plan: OutputPlan,
        entries: Iterable[ImageEntry],
        result: WriteResult | None = None,
    ) -> WriteResult:
        """
        Write entries in order.

        A failed entry is recorded and the remaining entries are still
        written. Archive read failures propagate to the caller.

        Args:
            plan: Base name and image count for the document
            entries: Matched entries in scan order
            result: Result to fill in, so a caller keeps partial progress
                when an archive read error propagates

        Returns:
            WriteResult with written paths and per-entry errors
        """
        if result is None:
            result = WriteResult()

        for index, entry in enumerate(entries, 1):
            try:
                self.ensure_output_dir()
                path = self.target_path(plan, index, entry.format)
                logger.info("Extracting to: %s", path)
                write_image(path, entry.read_bytes())
            except WriteError as e:
                logger.error("%s", e)
                result.errors.append(str(e))
                continue

            result.written.append(path)

        return result
