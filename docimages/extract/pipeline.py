"""
Extraction pipeline.

Runs the input collector over each user-supplied path, then scans and
writes one document at a time. Failures are recorded in the run summary
and never stop the remaining documents.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from docimages.errors import ExtractionError
from docimages.ingest.archive import ArchiveScanner
from docimages.ingest.sources import collect_documents
from docimages.naming import resolve_base_name
from docimages.report import DocumentReport, Failure, RunSummary
from docimages.runtime import ExtractionConfig, get_extraction_config

from .base import ContainerKind, EpubDocument, EpubMetadata, ImageEntry, OutputPlan
from .writer import ExtractionWriter, WriteResult

logger = logging.getLogger(__name__)


def matches_metadata_filter(
    metadata: EpubMetadata | None,
    title_filter: str | None,
    author_filter: str | None,
) -> bool:
    """
    Case-insensitive substring match of EPUB metadata against filters.

    A filter that is set never matches a missing field.
    """
    title = metadata.title if metadata else None
    author = metadata.author if metadata else None

    if title_filter and not (title and title_filter.lower() in title.lower()):
        return False
    if author_filter and not (author and author_filter.lower() in author.lower()):
        return False
    return True


def select_entries(scanner: ArchiveScanner, config: ExtractionConfig) -> list[ImageEntry]:
    """
    Matched entries for the open document, in archive order.

    With cover_only, EPUBs contribute just their cover image, or every
    image when cover_fallback is set and no cover is found.
    """
    document = scanner.document

    if not (config.cover_only and isinstance(document, EpubDocument)):
        return list(scanner.scan_images(config.formats))

    cover_path = document.metadata.cover_path if document.metadata else None
    if cover_path:
        cover = scanner.find_entry(cover_path, config.formats)
        if cover is not None:
            return [cover]

    if config.cover_fallback:
        logger.info(
            "No cover image found in %s, falling back to extracting all images.",
            document.path,
        )
        return list(scanner.scan_images(config.formats))

    logger.info("No cover image found in %s", document.path)
    return []


def extract_document(
    path: str | Path,
    config: ExtractionConfig | None = None,
    *,
    writer: ExtractionWriter | None = None,
) -> DocumentReport:
    """
    Extract the images of one document.

    Args:
        path: Path to a .docx or .epub file
        config: Run configuration (default: all formats into the cwd)
        writer: Writer to reuse across documents

    Returns:
        DocumentReport describing found, written and failed images
    """
    config = config or get_extraction_config()
    writer = writer or ExtractionWriter(config.output_dir, overwrite=config.overwrite)

    path = Path(path)
    kind = ContainerKind.from_path(path)
    report = DocumentReport(path=str(path), kind=kind.value if kind else path.suffix.lstrip("."))
    result = WriteResult()

    try:
        with ArchiveScanner(path) as scanner:
            document = scanner.document

            if isinstance(document, EpubDocument):
                if document.metadata is not None:
                    if document.metadata.title:
                        logger.info("EPUB Title: %s", document.metadata.title)
                    if document.metadata.author:
                        logger.info("EPUB Author: %s", document.metadata.author)

                if config.has_metadata_filter and not matches_metadata_filter(
                    document.metadata, config.title_filter, config.author_filter
                ):
                    logger.debug("Skipping %s: metadata does not match filter", path)
                    report.skipped = True
                    return report

            report.base_name = resolve_base_name(document)
            entries = select_entries(scanner, config)
            report.images_found = len(entries)

            if not entries:
                return report

            logger.info("Found %d image files in %s.", len(entries), path)
            plan = OutputPlan(report.base_name, len(entries))
            writer.write(plan, entries, result)

    except ExtractionError as e:
        logger.error("Error processing %s: %s", path, e)
        report.failures.append(Failure(path=str(path), kind=type(e).__name__, message=str(e)))

    finally:
        report.images_written = result.count
        report.outputs = [str(p) for p in result.written]
        report.failures.extend(
            Failure(path=str(path), kind="WriteError", message=message)
            for message in result.errors
        )

    return report


def extract_all(inputs: Iterable[str | Path], config: ExtractionConfig | None = None) -> RunSummary:
    """
    Extract images from every document reachable from the input paths.

    Args:
        inputs: Files and/or directories given by the user
        config: Run configuration

    Returns:
        RunSummary with per-document reports and input failures
    """
    config = config or get_extraction_config()
    writer = ExtractionWriter(config.output_dir, overwrite=config.overwrite)
    summary = RunSummary()

    for target in inputs:
        try:
            paths = collect_documents(target, recursive=config.recursive)
        except ExtractionError as e:
            logger.warning("%s", e)
            summary.input_failures.append(
                Failure(path=str(target), kind=type(e).__name__, message=str(e))
            )
            continue

        for path in paths:
            summary.documents.append(extract_document(path, config, writer=writer))

    if summary.images_extracted > 0:
        logger.info(
            "Processing complete! Extracted %d images from %d document(s).",
            summary.images_extracted,
            summary.documents_with_images,
        )
    else:
        logger.info("Processing complete! No images found.")

    return summary
