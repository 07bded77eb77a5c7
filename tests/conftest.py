"""Shared fixtures: small DOCX and EPUB archives built on the fly."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from xml.sax.saxutils import escape

import pytest

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG = b"\xff\xd8\xff\xe0" + b"\x01" * 24
GIF = b"GIF89a" + b"\x02" * 24


def build_docx(path: Path, media: list[tuple[str, bytes]]) -> Path:
    """Write a minimal .docx containing the given archive members, in order."""
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("[Content_Types].xml", "<Types/>")
        zf.writestr("word/document.xml", "<w:document/>")
        for name, data in media:
            zf.writestr(name, data)
    return path


def build_opf(
    *,
    title: str | None = None,
    author: str | None = None,
    items: list[tuple[str, str, str, str]] = (),
    cover_meta: str | None = None,
) -> str:
    """OPF package document. Items are (id, href, media-type, properties)."""
    meta = []
    if title is not None:
        meta.append(f"<dc:title>{escape(title)}</dc:title>")
    if author is not None:
        meta.append(f"<dc:creator>{escape(author)}</dc:creator>")
    if cover_meta is not None:
        meta.append(f'<meta name="cover" content="{cover_meta}"/>')

    manifest = []
    for item_id, href, media_type, properties in items:
        props = f' properties="{properties}"' if properties else ""
        manifest.append(
            f'<item id="{item_id}" href="{href}" media-type="{media_type}"{props}/>'
        )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<package xmlns="http://www.idpf.org/2007/opf" version="3.0">'
        '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/">'
        + "".join(meta)
        + "</metadata><manifest>"
        + "".join(manifest)
        + "</manifest></package>"
    )


CONTAINER_XML = (
    '<?xml version="1.0"?>'
    '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
    '<rootfiles><rootfile full-path="OEBPS/content.opf" '
    'media-type="application/oebps-package+xml"/></rootfiles></container>'
)


def build_epub(
    path: Path,
    *,
    title: str | None = None,
    author: str | None = None,
    images: list[tuple[str, str, bytes]] = (),
    cover_meta: str | None = None,
    cover_property: str | None = None,
    extra_members: list[tuple[str, bytes]] = (),
    with_container: bool = True,
) -> Path:
    """
    Write a minimal EPUB.

    Images are (href relative to OEBPS/, media-type, data); each is
    declared in the manifest with id "img<n>" and stored in order.
    """
    items = [("nav", "nav.xhtml", "application/xhtml+xml", "nav")]
    for n, (href, media_type, _) in enumerate(images, 1):
        props = "cover-image" if cover_property == href else ""
        items.append((f"img{n}", href, media_type, props))

    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        if with_container:
            zf.writestr("META-INF/container.xml", CONTAINER_XML)
        zf.writestr(
            "OEBPS/content.opf",
            build_opf(title=title, author=author, items=items, cover_meta=cover_meta),
        )
        zf.writestr("OEBPS/nav.xhtml", "<html/>")
        for href, _, data in images:
            zf.writestr(f"OEBPS/{href}", data)
        for name, data in extra_members:
            zf.writestr(name, data)
    return path


def mark_encrypted(path: Path, member: str) -> Path:
    """Set the encryption flag on a member's central directory record."""
    raw = bytearray(path.read_bytes())
    name = member.encode()
    pos = raw.find(b"PK\x01\x02")
    while pos >= 0:
        name_len = int.from_bytes(raw[pos + 28 : pos + 30], "little")
        if raw[pos + 46 : pos + 46 + name_len] == name:
            raw[pos + 8] |= 0x01
            path.write_bytes(bytes(raw))
            return path
        pos = raw.find(b"PK\x01\x02", pos + 4)
    raise KeyError(member)


@pytest.fixture
def make_docx(tmp_path):
    def factory(name: str = "report.docx", media: list[tuple[str, bytes]] = ()) -> Path:
        return build_docx(tmp_path / name, list(media))

    return factory


@pytest.fixture
def make_epub(tmp_path):
    def factory(name: str = "book.epub", **kwargs) -> Path:
        return build_epub(tmp_path / name, **kwargs)

    return factory


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by the CLI so later tests see a clean logger."""
    yield
    logger = logging.getLogger("docimages")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def out_dir(tmp_path) -> Path:
    return tmp_path / "out"
