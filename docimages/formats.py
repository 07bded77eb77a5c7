"""
Image format matching.

Maps archive entry extensions and EPUB media types to canonical format
identifiers (lowercase extension without the dot) and decides whether an
entry is eligible for extraction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


# Formats extracted when no filter is given
SUPPORTED_FORMATS: frozenset[str] = frozenset(
    {
        "jpg",
        "jpeg",
        "png",
        "gif",
        "bmp",
        "tiff",
        "tif",
        "svg",
        "wmf",
        "emf",
        "webp",
        "ico",
    }
)

# User-facing names that stand for more than one extension
FORMAT_ALIASES: dict[str, frozenset[str]] = {
    "jpg": frozenset({"jpg", "jpeg"}),
    "jpeg": frozenset({"jpg", "jpeg"}),
    "tif": frozenset({"tiff", "tif"}),
    "tiff": frozenset({"tiff", "tif"}),
}

MIME_FORMATS: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/tiff": "tiff",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "image/x-emf": "emf",
    "image/emf": "emf",
    "image/x-wmf": "wmf",
    "image/wmf": "wmf",
}


def normalize_format(name: str) -> frozenset[str]:
    """
    Expand a user-supplied format name to the extensions it covers.

    Args:
        name: Format name such as "PNG" or " jpg "

    Returns:
        Set of lowercase extensions, empty if the name is not recognized
    """
    key = name.strip().lower().lstrip(".")
    if key in FORMAT_ALIASES:
        return FORMAT_ALIASES[key]
    if key in SUPPORTED_FORMATS:
        return frozenset({key})
    logger.warning("Unrecognized format '%s' ignored", name.strip())
    return frozenset()


def extension_of(path: str) -> str | None:
    """Lowercase extension of the last path component, without dot."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return None
    ext = name.rsplit(".", 1)[-1].lower()
    return ext or None


def mime_to_format(mime: str | None) -> str | None:
    """Canonical format for an image media type, or None."""
    if not mime:
        return None
    return MIME_FORMATS.get(mime.strip().lower())


def is_image_mime(mime: str | None) -> bool:
    """Check whether a declared media type is an image type."""
    return bool(mime) and mime.strip().lower().startswith("image/")


@dataclass(frozen=True)
class FormatFilter:
    """
    Immutable set of formats selected for extraction.

    An empty filter means every format in SUPPORTED_FORMATS.
    """

    formats: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, value: str | Iterable[str] | None) -> "FormatFilter":
        """
        Build a filter from CLI input.

        Args:
            value: Comma-separated string ("png,jpg"), iterable of names,
                or None for no filter

        Returns:
            FormatFilter with aliases expanded and unknown names dropped
        """
        if value is None:
            return cls()
        if isinstance(value, str):
            names = value.split(",")
        else:
            names = [part for item in value for part in item.split(",")]

        selected: set[str] = set()
        for name in names:
            if name.strip():
                selected |= normalize_format(name)
        return cls(frozenset(selected))

    @property
    def active(self) -> frozenset[str]:
        """Formats actually accepted by this filter."""
        return self.formats or SUPPORTED_FORMATS

    def accepts(self, extension: str | None) -> bool:
        """Check whether an extension (case-insensitive, dot optional) is selected."""
        if not extension:
            return False
        ext = extension.lower().lstrip(".")
        if ext not in SUPPORTED_FORMATS:
            return False
        return ext in self.active
