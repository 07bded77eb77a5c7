"""
Docimages ingest layer.

Collects candidate documents from files and directories and opens them
as ZIP archives for scanning.

Usage:
    from docimages.ingest import ArchiveScanner, collect_documents

    for path in collect_documents("./books", recursive=True):
        with ArchiveScanner(path) as scanner:
            for entry in scanner.scan_images(FormatFilter()):
                print(entry.path, entry.size)
"""

from .archive import ArchiveScanner, is_path_safe, normalize_path
from .epub import parse_package, read_epub_metadata
from .sources import DirectorySource, collect_documents, is_supported_document

__all__ = [
    # Archive
    "ArchiveScanner",
    "is_path_safe",
    "normalize_path",
    # EPUB
    "parse_package",
    "read_epub_metadata",
    # Sources
    "DirectorySource",
    "collect_documents",
    "is_supported_document",
]
