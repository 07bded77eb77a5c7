"""Base types for image extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Union

if TYPE_CHECKING:
    from collections.abc import Callable


class ContainerKind(str, Enum):
    """Supported container document types."""

    DOCX = "docx"
    EPUB = "epub"

    @classmethod
    def from_path(cls, path: str | Path) -> "ContainerKind | None":
        """Infer the container kind from a file extension."""
        suffix = Path(path).suffix.lower()
        if suffix == ".docx":
            return cls.DOCX
        if suffix == ".epub":
            return cls.EPUB
        return None


@dataclass(frozen=True)
class EpubMetadata:
    """Metadata read from an EPUB package document."""

    title: str | None = None
    author: str | None = None
    # Archive path -> declared media type, read-only
    manifest: Mapping[str, str] = field(default_factory=dict, hash=False)
    cover_path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "manifest", MappingProxyType(dict(self.manifest)))


@dataclass(frozen=True)
class DocxDocument:
    """A Word document. Naming only needs the path."""

    path: Path
    kind: ContainerKind = field(default=ContainerKind.DOCX, init=False)


@dataclass(frozen=True)
class EpubDocument:
    """An EPUB book with optional parsed metadata."""

    path: Path
    metadata: EpubMetadata | None = None
    kind: ContainerKind = field(default=ContainerKind.EPUB, init=False)


DocumentHandle = Union[DocxDocument, EpubDocument]


@dataclass(frozen=True, slots=True)
class ImageEntry:
    """
    One matched archive member.

    Attributes:
        path: Internal archive path (forward slashes)
        size: Uncompressed size in bytes
        format: Lowercase extension used for the output file
        _content_loader: Reads the payload from the open archive
    """

    path: str
    size: int
    format: str
    _content_loader: Callable[[], bytes]

    def read_bytes(self) -> bytes:
        """Read the entry payload. Not cached; the buffer belongs to the caller."""
        return self._content_loader()


@dataclass(frozen=True)
class OutputPlan:
    """Base name and image count for one document's outputs."""

    base_name: str
    count: int

    def filename_for(self, index: int, extension: str) -> str:
        """
        Output filename for the image at a 1-based position.

        A single image gets the bare base name; several images are
        numbered from 1 in scan order.
        """
        if self.count > 1:
            return f"{self.base_name}_{index}.{extension}"
        return f"{self.base_name}.{extension}"
