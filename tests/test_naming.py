from __future__ import annotations

from pathlib import Path

import pytest

from docimages.extract.base import DocxDocument, EpubDocument, EpubMetadata
from docimages.naming import compose_epub_name, resolve_base_name, sanitize_filename


def epub(title=None, author=None, name="fallback.epub"):
    return EpubDocument(Path("/books") / name, EpubMetadata(title=title, author=author))


def test_sanitize_replaces_each_invalid_character():
    assert sanitize_filename("File/With\\Bad:Chars") == "File_With_Bad_Chars"
    assert sanitize_filename('Test*?"<>|') == "Test______"


def test_sanitize_keeps_unicode_and_trims():
    assert sanitize_filename("  Les Misérables, 第一卷  ") == "Les Misérables, 第一卷"


def test_sanitize_replaces_control_characters():
    assert sanitize_filename("a\x00b") == "a_b"


@pytest.mark.parametrize(
    "author, title, expected",
    [
        ("Stephen King", "The Shining", "Stephen King - The Shining"),
        (None, "The Shining", "The Shining"),
        ("Stephen King", None, "Stephen King"),
        (None, None, None),
        ("  ", "", None),
    ],
)
def test_compose_epub_name(author, title, expected):
    assert compose_epub_name(author, title) == expected


@pytest.mark.parametrize(
    "author, title, expected",
    [
        ("A", "T", "A - T"),
        (None, "T", "T"),
        ("A", None, "A"),
        (None, None, "fallback"),
    ],
)
def test_epub_naming_precedence(author, title, expected):
    assert resolve_base_name(epub(title=title, author=author)) == expected


def test_epub_name_is_sanitized():
    document = epub(title="Title:Subtitle", author="Author/Name")
    assert resolve_base_name(document) == "Author_Name - Title_Subtitle"


def test_epub_name_of_only_invalid_characters_falls_back_to_stem():
    assert resolve_base_name(epub(title="   ", author=None)) == "fallback"
    assert resolve_base_name(epub(title="\x00\x01", author=None)) == "fallback"
    assert resolve_base_name(epub(title='?*"', author=None)) == "fallback"
    assert resolve_base_name(epub(title=None, author="/")) == "fallback"


def test_epub_field_of_invalid_characters_is_sanitized_not_dropped():
    assert compose_epub_name("<>", "T") == "<> - T"
    assert resolve_base_name(epub(title="T", author="<>")) == "__ - T"
    assert resolve_base_name(epub(title='?*"', author="/")) == "_ - ___"


def test_epub_without_metadata_uses_stem():
    assert resolve_base_name(EpubDocument(Path("My Book.epub"), None)) == "My Book"


def test_docx_uses_stem_unsanitized():
    assert resolve_base_name(DocxDocument(Path("/docs/Q3: report.docx"))) == "Q3: report"
