"""Workbook and console rendering for npm download statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from openpyxl import Workbook

from ..models import PackageDownloads, PackageInfo, VersionDownloads
from .npm import round_half_up

OVERVIEW_HEADERS = (
    "Package Name",
    "Description",
    "Total Versions",
    "Latest Version",
    "Weekly Downloads",
    "Monthly Downloads",
    "Yearly Downloads",
    "Repository",
    "License",
    "Created Date",
    "Modified Date",
    "Keywords",
    "Maintainers",
)
DOWNLOAD_HEADERS = (
    "Package Name",
    "Weekly Downloads",
    "Monthly Downloads",
    "Yearly Downloads",
    "Total Downloads",
)
VERSION_HEADERS = ("Package Name", "Version", "Estimated Monthly Downloads", "Period")
SUMMARY_HEADERS = ("Metric", "Value")

TOP_PACKAGES = 5


@dataclass
class DownloadSummary:
    total_packages: int
    total_yearly: int
    total_monthly: int
    total_weekly: int
    average_yearly: int
    top_package: Optional[PackageDownloads]
    generated_at: str


def summarize(
    packages: Sequence[PackageInfo],
    downloads: Sequence[PackageDownloads],
    *,
    now: datetime | None = None,
) -> DownloadSummary:
    total_yearly = sum(item.yearly for item in downloads)
    top: Optional[PackageDownloads] = None
    for item in downloads:
        # First package wins ties.
        if top is None or item.yearly > top.yearly:
            top = item
    moment = now or datetime.now(timezone.utc)
    return DownloadSummary(
        total_packages=len(packages),
        total_yearly=total_yearly,
        total_monthly=sum(item.monthly for item in downloads),
        total_weekly=sum(item.weekly for item in downloads),
        average_yearly=round_half_up(total_yearly / len(packages)) if packages else 0,
        top_package=top,
        generated_at=moment.isoformat(),
    )


def build_workbook(
    packages: Sequence[PackageInfo],
    downloads: Sequence[PackageDownloads],
    versions: Sequence[VersionDownloads],
    summary: DownloadSummary,
) -> Workbook:
    workbook = Workbook()
    by_name: Dict[str, PackageDownloads] = {item.package_name: item for item in downloads}

    overview = workbook.active
    overview.title = "Package Overview"
    overview.append(OVERVIEW_HEADERS)
    for pkg in packages:
        counts = by_name.get(pkg.name, PackageDownloads(package_name=pkg.name))
        overview.append(
            [
                pkg.name,
                pkg.description or "",
                len(pkg.versions),
                pkg.latest_version,
                counts.weekly,
                counts.monthly,
                counts.yearly,
                pkg.repository or "",
                pkg.license or "",
                pkg.created_date or "",
                pkg.modified_date or "",
                ", ".join(pkg.keywords),
                ", ".join(pkg.maintainers),
            ]
        )

    sheet = workbook.create_sheet("Package Downloads")
    sheet.append(DOWNLOAD_HEADERS)
    for item in downloads:
        sheet.append([item.package_name, item.weekly, item.monthly, item.yearly, item.total])

    sheet = workbook.create_sheet("Version Downloads")
    sheet.append(VERSION_HEADERS)
    for item in versions:
        sheet.append([item.package_name, item.version, item.downloads, item.period])

    sheet = workbook.create_sheet("Summary")
    sheet.append(SUMMARY_HEADERS)
    top = summary.top_package
    for row in (
        ("Total Packages", summary.total_packages),
        ("Total Yearly Downloads", summary.total_yearly),
        ("Total Monthly Downloads", summary.total_monthly),
        ("Total Weekly Downloads", summary.total_weekly),
        ("Average Downloads per Package (Yearly)", summary.average_yearly),
        ("Most Downloaded Package", top.package_name if top else "N/A"),
        ("Most Downloaded Package Downloads", top.yearly if top else 0),
        ("Report Generated", summary.generated_at),
    ):
        sheet.append(row)
    return workbook


def write_report(
    path: Path,
    packages: Sequence[PackageInfo],
    downloads: Sequence[PackageDownloads],
    versions: Sequence[VersionDownloads],
    summary: DownloadSummary,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(packages, downloads, versions, summary).save(path)
    return path


def format_summary(summary: DownloadSummary, downloads: Sequence[PackageDownloads]) -> str:
    ranked = sorted(downloads, key=lambda item: item.yearly, reverse=True)[:TOP_PACKAGES]
    lines: List[str] = [
        "Summary:",
        f"   Total packages: {summary.total_packages}",
        f"   Total yearly downloads: {summary.total_yearly:,}",
        f"   Total weekly downloads: {summary.total_weekly:,}",
        f"   Average downloads per package: {summary.average_yearly:,}",
        "",
        f"Top {TOP_PACKAGES} packages by yearly downloads:",
    ]
    lines.extend(
        f"   {index}. {item.package_name}: {item.yearly:,} downloads"
        for index, item in enumerate(ranked, start=1)
    )
    return "\n".join(lines)


__all__ = [
    "DownloadSummary",
    "build_workbook",
    "format_summary",
    "summarize",
    "write_report",
]
