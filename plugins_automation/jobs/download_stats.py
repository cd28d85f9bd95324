"""Aggregate npm download statistics into an xlsx workbook."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ..errors import AutomationError, SetupError
from ..logging import get_logger
from ..stats import NpmRegistryClient, format_summary, summarize, write_report
from .base import JobContext

logger = get_logger("jobs.download_stats")


def run_download_stats(
    context: JobContext,
    *,
    client: NpmRegistryClient | None = None,
    echo: Callable[[str], None] = print,
) -> Optional[Path]:
    """Fetch package and download data for the configured scopes and write the report.

    Returns the workbook path, or ``None`` when no package was found. Any
    failure is raised as :class:`SetupError` so the CLI exits non-zero.
    """
    stats = context.config.stats
    if stats is None:
        raise SetupError("Download statistics output is not configured")
    client = client or NpmRegistryClient(
        search_delay=context.config.request_delay,
        download_delay=context.config.download_delay,
    )
    scopes = ", ".join(stats.scopes)
    try:
        packages = client.fetch_packages(stats.scopes)
        logger.info("Found %d packages in %s", len(packages), scopes)
        if not packages:
            logger.warning("No packages found in %s", scopes)
            return None

        logger.info("Fetching download statistics...")
        downloads = client.fetch_downloads(packages)
        versions = client.fetch_version_downloads(packages)
        summary = summarize(packages, downloads)
        path = write_report(stats.output_path, packages, downloads, versions, summary)
    except (AutomationError, OSError) as exc:
        raise SetupError(f"Error generating npm download statistics: {exc}") from exc

    logger.info("Excel report generated: %s", path)
    echo(format_summary(summary, downloads))
    return path


__all__ = ["run_download_stats"]
