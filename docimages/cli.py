"""
Docimages CLI.

Extract embedded images from Word (.docx) and EPUB files.

Examples:
    docimages report.docx
    docimages ./books -r -o ./covers --cover-only
    docimages -i a.docx b.epub -f png,jpg --report json
"""

from __future__ import annotations

import argparse
import json
import sys

from docimages import __version__


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the docimages command."""
    parser = argparse.ArgumentParser(
        prog="docimages",
        description="Extract images from Word (.docx) and EPUB files.",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="Paths to input .docx/.epub files or directories",
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="named_inputs",
        nargs="+",
        action="extend",
        default=[],
        help="Paths to input .docx/.epub files or directories",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=".",
        help="Output directory (default: current directory)",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Search directories recursively for .docx/.epub files",
    )
    parser.add_argument(
        "-f",
        "--formats",
        default=None,
        help='Image formats to extract, e.g. "png,jpg" (default: all supported)',
    )
    parser.add_argument(
        "-c",
        "--cover-only",
        action="store_true",
        help="Extract only the cover image from EPUB files",
    )
    parser.add_argument(
        "--cover-fallback",
        action="store_true",
        help="Extract all images when no cover is found (requires --cover-only)",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Only process EPUBs whose title contains this text (case-insensitive)",
    )
    parser.add_argument(
        "--author",
        default=None,
        help="Only process EPUBs whose author contains this text (case-insensitive)",
    )
    parser.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Keep existing files and pick a free name instead of replacing them",
    )
    parser.add_argument(
        "--report",
        choices=["text", "json"],
        default="text",
        help="Summary format (default: text)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def print_summary(summary, fmt: str = "text") -> None:
    """Render the run summary to stdout."""
    if fmt == "json":
        print(json.dumps(summary.to_dict(), indent=2, default=str))
        return

    print(f"Documents processed: {summary.documents_processed}")
    print(f"Images extracted: {summary.images_extracted}")

    failures = summary.failures
    if failures:
        print()
        print(f"Failures ({len(failures)}):")
        for failure in failures:
            print(f"  [{failure.kind}] {failure.message}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    from docimages.extract.pipeline import extract_all
    from docimages.logging_config import setup_logging
    from docimages.runtime import get_extraction_config

    parser = build_parser()
    args = parser.parse_args(argv)

    inputs = list(args.inputs) + list(args.named_inputs)
    if not inputs:
        parser.error("at least one input path is required")
    if args.cover_fallback and not args.cover_only:
        parser.error("--cover-fallback requires --cover-only")

    setup_logging(verbose=args.verbose)

    config = get_extraction_config(
        args.output,
        args.formats,
        recursive=args.recursive,
        cover_only=args.cover_only,
        cover_fallback=args.cover_fallback,
        title_filter=args.title,
        author_filter=args.author,
        overwrite=not args.no_overwrite,
    )

    try:
        summary = extract_all(inputs, config)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    print_summary(summary, args.report)
    return 0 if summary.ok else 1


if __name__ == "__main__":
    sys.exit(main())
