"""Exceptions raised while collecting, scanning and writing documents."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for image extraction."""

    pass


class UnsupportedInputError(ExtractionError):
    """Raised when an input file is neither .docx nor .epub."""

    pass


class InputAccessError(ExtractionError):
    """Raised when an input path is missing or cannot be read."""

    pass


class ArchiveError(ExtractionError):
    """Raised when a document is not a valid or readable ZIP archive."""

    pass


class MetadataError(ExtractionError):
    """Raised when EPUB package metadata is absent or unreadable."""

    pass


class WriteError(ExtractionError):
    """Raised when an output directory or image file cannot be written."""

    pass
