from __future__ import annotations

import json

import pytest

from conftest import JPEG, PNG
from docimages.cli import build_parser, main


def test_extracts_and_prints_summary(make_docx, out_dir, capsys):
    path = make_docx("report.docx", media=[("word/media/a.png", PNG), ("word/media/b.jpg", JPEG)])

    code = main([str(path), "-o", str(out_dir)])

    assert code == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["report_1.png", "report_2.jpg"]
    out = capsys.readouterr().out
    assert "Documents processed: 1" in out
    assert "Images extracted: 2" in out


def test_named_inputs_and_format_filter(make_docx, out_dir):
    a = make_docx("a.docx", media=[("word/media/x.png", PNG), ("word/media/y.jpg", JPEG)])
    b = make_docx("b.docx", media=[("word/media/z.jpg", JPEG)])

    code = main(["-i", str(a), str(b), "-o", str(out_dir), "-f", "JPG"])

    assert code == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["a.jpg", "b.jpg"]


def test_json_report(make_docx, out_dir, capsys):
    path = make_docx("report.docx", media=[("word/media/a.png", PNG)])

    main([str(path), "-o", str(out_dir), "--report", "json"])

    data = json.loads(capsys.readouterr().out)
    assert data["images_extracted"] == 1
    assert data["documents"][0]["base_name"] == "report"


def test_failures_give_exit_code_1(tmp_path, out_dir, capsys):
    broken = tmp_path / "broken.docx"
    broken.write_bytes(b"nope")

    code = main([str(broken), "-o", str(out_dir)])

    assert code == 1
    assert "[ArchiveError]" in capsys.readouterr().out


def test_requires_an_input():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_cover_fallback_requires_cover_only(make_epub):
    with pytest.raises(SystemExit) as exc:
        main([str(make_epub()), "--cover-fallback"])
    assert exc.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args(["x.docx"])
    assert args.output == "."
    assert args.recursive is False
    assert args.formats is None
    assert args.no_overwrite is False
    assert args.report == "text"
