"""Image extraction: document types, output naming plan and the writer."""

from __future__ import annotations

from .base import (
    ContainerKind,
    DocumentHandle,
    DocxDocument,
    EpubDocument,
    EpubMetadata,
    ImageEntry,
    OutputPlan,
)
from .writer import ExtractionWriter, WriteResult

__all__ = [
    "ContainerKind",
    "DocumentHandle",
    "DocxDocument",
    "EpubDocument",
    "EpubMetadata",
    "ImageEntry",
    "OutputPlan",
    "ExtractionWriter",
    "WriteResult",
]
