"""Extract embedded images from Word (.docx) and EPUB documents."""

from __future__ import annotations

__version__ = "0.1.0"

from docimages.errors import (
    ArchiveError,
    ExtractionError,
    InputAccessError,
    MetadataError,
    UnsupportedInputError,
    WriteError,
)
from docimages.extract.pipeline import extract_all, extract_document
from docimages.formats import SUPPORTED_FORMATS, FormatFilter
from docimages.report import DocumentReport, Failure, RunSummary
from docimages.runtime import ExtractionConfig, get_extraction_config

__all__ = [
    "__version__",
    "ArchiveError",
    "ExtractionError",
    "InputAccessError",
    "MetadataError",
    "UnsupportedInputError",
    "WriteError",
    "extract_all",
    "extract_document",
    "SUPPORTED_FORMATS",
    "FormatFilter",
    "DocumentReport",
    "Failure",
    "RunSummary",
    "ExtractionConfig",
    "get_extraction_config",
]
