"""
Run summary models.

The extraction core records what happened per document; the CLI decides
how to render the summary and which exit status to use.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Failure(BaseModel):
    """A failure attributed to one input path or document."""

    path: str
    kind: str  # Exception class name, e.g. "ArchiveError"
    message: str


class DocumentReport(BaseModel):
    """Outcome of extracting one document."""

    path: str
    kind: str  # "docx" or "epub"
    base_name: str | None = None
    images_found: int = 0
    images_written: int = 0
    outputs: list[str] = Field(default_factory=list)
    skipped: bool = False  # EPUB excluded by title/author filter
    failures: list[Failure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class RunSummary(BaseModel):
    """Totals for one invocation."""

    documents: list[DocumentReport] = Field(default_factory=list)
    input_failures: list[Failure] = Field(default_factory=list)

    @property
    def documents_processed(self) -> int:
        return sum(1 for d in self.documents if not d.skipped)

    @property
    def documents_with_images(self) -> int:
        return sum(1 for d in self.documents if d.images_written > 0)

    @property
    def images_extracted(self) -> int:
        return sum(d.images_written for d in self.documents)

    @property
    def failures(self) -> list[Failure]:
        """Input failures first, then per-document failures."""
        failures = list(self.input_failures)
        for document in self.documents:
            failures.extend(document.failures)
        return failures

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        """Summary with computed totals, suitable for JSON output."""
        data = self.model_dump()
        data["documents_processed"] = self.documents_processed
        data["documents_with_images"] = self.documents_with_images
        data["images_extracted"] = self.images_extracted
        data["failure_count"] = len(self.failures)
        return data
