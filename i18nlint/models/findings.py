"""Finding and report models for lint results.

Includes Pydantic models for serialization of per-file and whole-run reports.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, computed_field

from i18nlint.syntax.nodes import SourceSpan


class Finding(BaseModel):
    """A literal string that should be externalized for translation."""

    message_id: str = Field(description="Stable message identifier (literal, property, attribute, ...)")
    message: str = Field(description="Rendered human-readable message")
    data: dict[str, str] = Field(default_factory=dict, description="Values substituted into the message")
    position: SourceSpan | None = Field(default=None, description="Source span from the front end")


class FileReport(BaseModel):
    """Lint result for a single file."""

    file: str = Field(description="File path relative to the scan root")
    language: str | None = Field(default=None, description="Front-end language used")
    findings: list[Finding] = Field(default_factory=list)
    error: str | None = Field(default=None, description="Why the file could not be linted")
    cached: bool = Field(default=False, description="Findings were served from the lint cache")


class ReportMetadata(BaseModel):
    """Metadata about a lint run."""

    analyzer: str = Field(default="i18nlint")
    version: str = Field(description="Version of the analyzer")
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    roots: list[str] = Field(default_factory=list, description="Paths that were scanned")


class LintReport(BaseModel):
    """Aggregated result of linting a set of paths."""

    files: list[FileReport] = Field(default_factory=list)
    metadata: ReportMetadata

    @computed_field
    @property
    def finding_count(self) -> int:
        return sum(len(f.findings) for f in self.files)

    @computed_field
    @property
    def error_count(self) -> int:
        return sum(1 for f in self.files if f.error)
