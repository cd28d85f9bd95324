"""npm download statistics for the organization's package scopes."""

from .npm import NpmRegistryClient, estimate_version_downloads
from .report import build_workbook, format_summary, summarize, write_report

__all__ = [
    "NpmRegistryClient",
    "build_workbook",
    "estimate_version_downloads",
    "format_summary",
    "summarize",
    "write_report",
]
