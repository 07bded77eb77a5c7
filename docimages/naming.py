"""
Output base names for source documents.

Word documents are named after their file. EPUB books are named after
their author and title when the package metadata provides them.
"""

from __future__ import annotations

import unicodedata

from docimages.extract.base import DocumentHandle, EpubDocument

# Characters that are not allowed in filenames on common filesystems
INVALID_FILENAME_CHARS: frozenset[str] = frozenset('/\\:*?"<>|')


def _is_invalid(ch: str) -> bool:
    return ch in INVALID_FILENAME_CHARS or unicodedata.category(ch) == "Cc"


def _has_usable_chars(name: str) -> bool:
    return any(not _is_invalid(ch) and not ch.isspace() for ch in name)


def sanitize_filename(name: str) -> str:
    """
    Make a string safe to use as a filename.

    Replaces each invalid character (and control characters such as NUL)
    with an underscore and trims surrounding whitespace. Everything else,
    including non-ASCII text, is kept.

    Args:
        name: Raw name, e.g. composed from metadata

    Returns:
        Sanitized name, possibly empty
    """
    cleaned = "".join("_" if _is_invalid(ch) else ch for ch in name)
    return cleaned.strip()


def compose_epub_name(author: str | None, title: str | None) -> str | None:
    """
    Compose "{author} - {title}" from whichever fields are present.

    Fields are trimmed and blank ones count as missing. Returns None when
    neither is present. Invalid characters are left for sanitize_filename.
    """
    author = author.strip() if author else None
    title = title.strip() if title else None

    if author and title:
        return f"{author} - {title}"
    if title:
        return title
    if author:
        return author
    return None


def resolve_base_name(document: DocumentHandle) -> str:
    """
    Derive the output base name for a document.

    Args:
        document: Opened DOCX or EPUB document

    Returns:
        Base name used for every image extracted from the document
    """
    stem = document.path.stem

    if not isinstance(document, EpubDocument) or document.metadata is None:
        return stem

    composed = compose_epub_name(document.metadata.author, document.metadata.title)
    if composed is None or not _has_usable_chars(composed):
        return stem
    return sanitize_filename(composed) or stem
