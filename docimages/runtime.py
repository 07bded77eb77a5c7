"""
Runtime configuration for docimages.

Collects the options that flow from the CLI into the extraction
pipeline: where to write, which formats to keep, how to walk
directories and the EPUB-specific cover and metadata filters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from docimages.formats import FormatFilter


@dataclass
class ExtractionConfig:
    """
    Configuration for one extraction run.

    Attributes:
        output_dir: Directory receiving the images (created if absent)
        formats: Format filter; empty means every supported format
        recursive: Descend into subdirectories of directory inputs
        cover_only: Extract only the cover image from EPUB files
        cover_fallback: With cover_only, extract all images when no cover exists
        title_filter: Only process EPUBs whose title contains this text
        author_filter: Only process EPUBs whose author contains this text
        overwrite: Replace existing output files instead of picking a free name
    """

    output_dir: Path = field(default_factory=lambda: Path("."))
    formats: FormatFilter = field(default_factory=FormatFilter)

    # Directory traversal
    recursive: bool = False

    # EPUB options
    cover_only: bool = False
    cover_fallback: bool = False
    title_filter: str | None = None
    author_filter: str | None = None

    overwrite: bool = True

    def __post_init__(self):
        """Normalize paths and reject contradictory options."""
        self.output_dir = Path(self.output_dir)
        if not isinstance(self.formats, FormatFilter):
            self.formats = FormatFilter.parse(self.formats)
        if self.cover_fallback and not self.cover_only:
            raise ValueError("cover_fallback requires cover_only")

    @property
    def has_metadata_filter(self) -> bool:
        return bool(self.title_filter or self.author_filter)


def get_extraction_config(
    output_dir: str | Path | None = None,
    formats: str | Iterable[str] | None = None,
    *,
    recursive: bool = False,
    cover_only: bool = False,
    cover_fallback: bool = False,
    title_filter: str | None = None,
    author_filter: str | None = None,
    overwrite: bool = True,
) -> ExtractionConfig:
    """
    Create an extraction configuration with sensible defaults.

    Args:
        output_dir: Output directory (default: current directory)
        formats: Comma-separated or listed format names (default: all)
        recursive: Walk directory inputs recursively
        cover_only: EPUB cover extraction only
        cover_fallback: Fall back to all images when no cover exists
        title_filter: EPUB title substring filter
        author_filter: EPUB author substring filter
        overwrite: Replace existing files

    Returns:
        Configured ExtractionConfig instance
    """
    return ExtractionConfig(
        output_dir=Path(output_dir) if output_dir is not None else Path("."),
        formats=FormatFilter.parse(formats),
        recursive=recursive,
        cover_only=cover_only,
        cover_fallback=cover_fallback,
        title_filter=title_filter or None,
        author_filter=author_filter or None,
        overwrite=overwrite,
    )
