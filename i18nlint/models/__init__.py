"""Pydantic models for options and lint results."""

from i18nlint.models.findings import FileReport, Finding, LintReport, ReportMetadata
from i18nlint.models.options import LintOptions, TagRule, find_config, load_options

__all__ = [
    "FileReport",
    "Finding",
    "LintOptions",
    "LintReport",
    "ReportMetadata",
    "TagRule",
    "find_config",
    "load_options",
]
