"""
EPUB package document parsing.

Reads the OCF container to locate the OPF package document, then pulls
out the Dublin Core title and creator, the manifest (resource path to
media type) and the cover image reference.
"""

from __future__ import annotations

import posixpath
import zipfile
import zlib
from urllib.parse import unquote
from xml.etree import ElementTree as ET

from docimages.errors import MetadataError
from docimages.extract.base import EpubMetadata

CONTAINER_PATH = "META-INF/container.xml"
DC_NS = "http://purl.org/dc/elements/1.1/"


def _text(element: ET.Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    text = element.text.strip()
    return text or None


def find_package_path(zf: zipfile.ZipFile) -> str:
    """
    Locate the OPF package document inside an EPUB.

    Args:
        zf: Open EPUB archive

    Returns:
        Archive path of the first rootfile

    Raises:
        MetadataError: If the container document is missing or malformed
    """
    try:
        root = ET.fromstring(zf.read(CONTAINER_PATH))
    except KeyError as e:
        raise MetadataError(f"Missing {CONTAINER_PATH}") from e
    except (ET.ParseError, zipfile.BadZipFile, zlib.error, RuntimeError, EOFError, OSError) as e:
        raise MetadataError(f"Unreadable {CONTAINER_PATH}: {e}") from e

    for rootfile in root.iterfind(".//{*}rootfile"):
        full_path = rootfile.get("full-path")
        if full_path:
            return full_path.lstrip("/")

    raise MetadataError("No rootfile declared in container.xml")


def resolve_href(package_path: str, href: str) -> str:
    """Resolve a manifest href relative to the package document."""
    href = unquote(href.split("#", 1)[0])
    base = posixpath.dirname(package_path)
    return posixpath.normpath(posixpath.join(base, href)).lstrip("/")


def parse_package(package_path: str, data: bytes) -> EpubMetadata:
    """
    Parse an OPF package document.

    Args:
        package_path: Archive path of the package document
        data: Raw package document bytes

    Returns:
        EpubMetadata with title, author, manifest and cover path

    Raises:
        MetadataError: If the document is not well-formed XML
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MetadataError(f"Malformed package document {package_path}: {e}") from e

    title: str | None = None
    author: str | None = None
    cover_id: str | None = None

    metadata = next(root.iterfind(".//{*}metadata"), None)
    if metadata is not None:
        title = _text(next(metadata.iterfind(f".//{{{DC_NS}}}title"), None))
        author = _text(next(metadata.iterfind(f".//{{{DC_NS}}}creator"), None))

        # EPUB 2 cover reference
        for meta in metadata.iterfind(".//{*}meta"):
            if meta.get("name") == "cover" and meta.get("content"):
                cover_id = meta.get("content")
                break

    manifest: dict[str, str] = {}
    ids: dict[str, str] = {}
    cover_path: str | None = None

    for item in root.iterfind(".//{*}item"):
        href = item.get("href")
        if not href:
            continue
        path = resolve_href(package_path, href)
        manifest[path] = item.get("media-type", "")
        item_id = item.get("id")
        if item_id:
            ids[item_id] = path

        # EPUB 3 cover declaration wins over the EPUB 2 meta
        properties = (item.get("properties") or "").split()
        if "cover-image" in properties and cover_path is None:
            cover_path = path

    if cover_path is None and cover_id is not None:
        cover_path = ids.get(cover_id)

    return EpubMetadata(
        title=title,
        author=author,
        manifest=manifest,
        cover_path=cover_path,
    )


def read_epub_metadata(zf: zipfile.ZipFile) -> EpubMetadata:
    """
    Read package metadata from an open EPUB archive.

    Raises:
        MetadataError: If the metadata cannot be located or parsed
    """
    package_path = find_package_path(zf)
    try:
        data = zf.read(package_path)
    except KeyError as e:
        raise MetadataError(f"Package document not found: {package_path}") from e
    except (zipfile.BadZipFile, zlib.error, RuntimeError, EOFError, OSError) as e:
        raise MetadataError(f"Unreadable package document {package_path}: {e}") from e
    return parse_package(package_path, data)
