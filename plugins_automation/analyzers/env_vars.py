"""Discover environment variable names referenced by plugin source files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Set

_SOURCE_SUFFIXES = (".ts", ".js")
_EXCLUDED_MARKERS = ("node_modules", ".git")

ENV_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"process\.env\.(\w+)"),
    re.compile(r"getSetting\(['\"](\w+)['\"]\)"),
    re.compile(r"getEnv\(['\"](\w+)['\"]\)"),
    re.compile(r"runtime\.getSetting\(['\"](\w+)['\"]\)"),
)


def scan_text(text: str) -> Set[str]:
    """Return every variable name referenced through a known access pattern."""
    found: Set[str] = set()
    for pattern in ENV_PATTERNS:
        found.update(match.group(1) for match in pattern.finditer(text))
    return found


def iter_source_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            name for name in dirnames if not any(marker in name for marker in _EXCLUDED_MARKERS)
        )
        for filename in sorted(filenames):
            if filename.endswith(_SOURCE_SUFFIXES):
                yield Path(dirpath) / filename


def scan_files(paths: Iterable[Path]) -> List[str]:
    found: Set[str] = set()
    for path in paths:
        try:
            found.update(scan_text(path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError):
            continue
    return sorted(found)


def usage_lines(repo_path: Path, names: Iterable[str], limit: int = 200) -> Dict[str, str]:
    """Return the first source line mentioning each name, trimmed to ``limit`` chars."""
    pending = {name: re.compile(rf"\b{re.escape(name)}\b") for name in names}
    found: Dict[str, str] = {}
    for path in iter_source_files(_scan_root(repo_path)):
        if not pending:
            break
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError):
            continue
        for line in lines:
            for name in [item for item, pattern in pending.items() if pattern.search(line)]:
                found[name] = line.strip()[:limit]
                del pending[name]
    return found


def _scan_root(repo_path: Path) -> Path:
    src = repo_path / "src"
    return src if src.is_dir() else repo_path


def scan_repository(repo_path: Path) -> List[str]:
    """Scan ``src/`` (or the repository root when absent) for variable names.

    The result is de-duplicated and sorted; dynamically built names are not
    resolved.
    """
    return scan_files(iter_source_files(_scan_root(repo_path)))


__all__ = [
    "ENV_PATTERNS",
    "iter_source_files",
    "scan_files",
    "scan_repository",
    "scan_text",
    "usage_lines",
]
