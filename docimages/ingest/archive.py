"""
ZIP-backed document scanning.

Opens a .docx or .epub as a ZIP archive and yields the image entries
that match the active format filter, in the archive's physical order.

Usage:
    with ArchiveScanner("report.docx") as scanner:
        document = scanner.document
        for entry in scanner.scan_images(FormatFilter()):
            data = entry.read_bytes()
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Callable, Iterator, Mapping

from docimages.errors import ArchiveError, MetadataError, UnsupportedInputError
from docimages.extract.base import (
    ContainerKind,
    DocumentHandle,
    DocxDocument,
    EpubDocument,
    ImageEntry,
)
from docimages.formats import (
    SUPPORTED_FORMATS,
    FormatFilter,
    extension_of,
    is_image_mime,
    mime_to_format,
)

from .epub import read_epub_metadata

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """
    Normalize path to forward slashes, remove leading ./

    Converts Windows backslashes and ensures consistent format.
    """
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def is_path_safe(path: str) -> bool:
    """
    Check that an archive entry path cannot escape an extraction root.

    Rejects empty paths, absolute paths, drive-qualified paths and
    paths with .. components.
    """
    normalized = normalize_path(path)
    if not normalized:
        return False

    ppath = PurePosixPath(normalized)
    if ppath.is_absolute():
        return False
    if ":" in ppath.parts[0]:
        return False
    return ".." not in ppath.parts


class ArchiveScanner:
    """
    Scoped access to one container document.

    The archive is opened on enter and always closed on exit, whether
    scanning finished or an error propagated.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize scanner.

        Args:
            path: Path to a .docx or .epub file

        Raises:
            UnsupportedInputError: If the extension is not .docx or .epub
        """
        self.path = Path(path)
        kind = ContainerKind.from_path(self.path)
        if kind is None:
            raise UnsupportedInputError(
                f"Unsupported file type: {self.path}. Supported types: .docx, .epub"
            )
        self.kind = kind
        self._zip_file: zipfile.ZipFile | None = None
        self._document: DocumentHandle | None = None

    def __enter__(self) -> "ArchiveScanner":
        try:
            self._zip_file = zipfile.ZipFile(self.path, "r")
        except (zipfile.BadZipFile, zlib.error) as e:
            raise ArchiveError(f"Failed to read zip archive: {self.path}: {e}") from e
        except OSError as e:
            raise ArchiveError(f"Failed to open input file: {self.path}: {e}") from e
        try:
            self._document = self._open_document()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the archive handle."""
        if self._zip_file is not None:
            self._zip_file.close()
            self._zip_file = None

    @property
    def document(self) -> DocumentHandle:
        """The opened document handle."""
        if self._document is None:
            raise ArchiveError(f"Archive not open: {self.path}")
        return self._document

    def _archive(self) -> zipfile.ZipFile:
        if self._zip_file is None:
            raise ArchiveError(f"Archive not open: {self.path}")
        return self._zip_file

    def _open_document(self) -> DocumentHandle:
        if self.kind is ContainerKind.DOCX:
            return DocxDocument(self.path)

        try:
            metadata = read_epub_metadata(self._archive())
        except MetadataError as e:
            # Naming falls back to the file stem
            logger.debug("No usable EPUB metadata in %s: %s", self.path, e)
            metadata = None
        return EpubDocument(self.path, metadata)

    def _loader(self, info: zipfile.ZipInfo) -> Callable[[], bytes]:
        zf = self._archive()

        def loader() -> bytes:
            try:
                return zf.read(info)
            except (zipfile.BadZipFile, zlib.error, OSError, EOFError) as e:
                raise ArchiveError(
                    f"Failed to read {info.filename} from {self.path}: {e}"
                ) from e
            except RuntimeError as e:
                # Encrypted members or unsupported compression methods
                raise ArchiveError(
                    f"Cannot read {info.filename} from {self.path}: {e}"
                ) from e

        return loader

    def entries(self) -> Iterator[zipfile.ZipInfo]:
        """
        Walk archive members in physical order.

        Skips directories, empty members and unsafe paths.

        Yields:
            ZipInfo for each candidate member
        """
        for info in self._archive().infolist():
            if info.is_dir():
                continue
            if info.file_size == 0:
                continue
            if not is_path_safe(info.filename):
                logger.warning("Skipping unsafe archive path %r in %s", info.filename, self.path)
                continue
            yield info

    def scan_images(self, formats: FormatFilter) -> Iterator[ImageEntry]:
        """
        Yield image entries matching the filter, in archive order.

        Args:
            formats: Active format filter

        Yields:
            ImageEntry for each matching member
        """
        document = self.document
        manifest: Mapping[str, str] = {}
        if isinstance(document, EpubDocument) and document.metadata is not None:
            manifest = document.metadata.manifest

        for info in self.entries():
            path = normalize_path(info.filename)
            ext = extension_of(path)

            if path in manifest:
                fmt = self._match_declared(ext, manifest[path], formats)
            else:
                fmt = ext if formats.accepts(ext) else None

            if fmt is None:
                continue

            yield ImageEntry(
                path=path,
                size=info.file_size,
                format=fmt,
                _content_loader=self._loader(info),
            )

    @staticmethod
    def _match_declared(ext: str | None, mime: str, formats: FormatFilter) -> str | None:
        """
        Match an entry declared in the EPUB manifest.

        The media type decides inclusion. The entry's own extension names
        the output; the media type only supplies one when the entry has none.
        """
        if not is_image_mime(mime):
            return None

        if ext in SUPPORTED_FORMATS:
            return ext if formats.accepts(ext) else None

        # Missing or unrecognized extension on a declared image, e.g. "cover.jpe"
        if formats.accepts(mime_to_format(mime)):
            return ext or mime_to_format(mime)
        return None

    def find_entry(self, path: str, formats: FormatFilter) -> ImageEntry | None:
        """
        Look up a single image entry by archive path.

        Used for EPUB cover extraction.
        """
        for entry in self.scan_images(formats):
            if entry.path == path:
                return entry
        return None
