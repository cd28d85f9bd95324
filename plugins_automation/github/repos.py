"""Repository discovery and per-repository checkouts."""

from __future__ import annotations

import shutil
from pathlib import Path
from types import TracebackType
from typing import List, Optional, Sequence, Type

from ..config import RunOptions
from ..errors import SetupError
from ..git import Publisher
from ..logging import get_logger
from ..models import RepositoryRef
from .client import GitHubClient

logger = get_logger("repos")


def is_url(ref: str) -> bool:
    return ref.startswith(("http://", "https://"))


def repo_name_from(ref: str) -> str:
    """Return the repository name for a bare name or an http(s) clone URL."""
    if not is_url(ref):
        return ref
    last = ref.split("/")[-1]
    if not last:
        raise ValueError(f"Invalid URL format: {ref}")
    return last[:-4] if last.endswith(".git") else last


def clone_url_for(ref: str, org: str) -> str:
    if is_url(ref):
        return ref if ref.endswith(".git") else f"{ref}.git"
    return f"https://github.com/{org}/{ref}.git"


def discover_remote(client: GitHubClient, org: str, prefix: str) -> List[str]:
    repos = client.list_org_repos(org)
    names = [str(repo.get("name", "")) for repo in repos if isinstance(repo, dict)]
    matched = [name for name in names if name.startswith(prefix)]
    logger.info("Found %d plugin repositories in %s", len(matched), org)
    return matched


def discover_local(root: Path, prefix: str) -> List[str]:
    if not root.is_dir():
        raise SetupError(f"Local plugin root not found: {root}")
    names = sorted(
        item.name for item in root.iterdir() if item.is_dir() and item.name.startswith(prefix)
    )
    logger.info("Found %d local plugins under %s", len(names), root)
    return names


def select_targets(names: Sequence[str], options: RunOptions) -> List[str]:
    """Narrow the discovered names according to test mode."""
    if not options.test_mode:
        return list(names)
    if options.repo:
        wanted = repo_name_from(options.repo)
        selected = [name for name in names if name == wanted]
        if not selected:
            raise SetupError(f"Repository {options.repo} not found")
        return selected
    return list(names[:1])


class RepositoryWorkspace:
    """Context manager yielding the checkout directory for one repository.

    Remote mode clones into ``<temp_dir>/<name>`` and removes the clone on
    exit; local mode resolves ``<local_root>/<name>`` and leaves it in place.
    """

    def __init__(
        self,
        ref: RepositoryRef,
        *,
        local_mode: bool,
        temp_dir: Path,
        local_root: Path,
        publisher: Publisher | None = None,
    ) -> None:
        self.ref = ref
        self.local_mode = local_mode
        self.temp_dir = temp_dir
        self.local_root = local_root
        self.publisher = publisher or Publisher()
        self.path: Optional[Path] = None

    def __enter__(self) -> Path:
        if self.local_mode:
            path = self.local_root / self.ref.name
            if not path.is_dir():
                raise FileNotFoundError(f"Local plugin {self.ref.name} not found at {path}")
        else:
            path = self.temp_dir / self.ref.name
            if path.exists():
                shutil.rmtree(path)
            self.publisher.clone(self.ref.clone_url, path)
            logger.info("Cloned %s", self.ref.name)
        self.path = path
        return path

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if not self.local_mode and self.path is not None:
            shutil.rmtree(self.path, ignore_errors=True)


__all__ = [
    "RepositoryWorkspace",
    "clone_url_for",
    "discover_local",
    "discover_remote",
    "is_url",
    "repo_name_from",
    "select_targets",
]
