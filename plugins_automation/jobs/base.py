"""Shared plumbing for per-repository batch jobs."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..config import AutomationConfig, RunOptions
from ..errors import SetupError
from ..git import Publisher
from ..github import GitHubClient, RepositoryWorkspace, discover_local, discover_remote, select_targets
from ..github.repos import clone_url_for, repo_name_from
from ..logging import get_logger
from ..models import RepositoryRef

logger = get_logger("jobs")


@dataclass
class JobContext:
    """Everything a job needs for one invocation."""

    config: AutomationConfig
    options: RunOptions
    publisher: Publisher = field(default_factory=Publisher)
    github: Optional[GitHubClient] = None
    clock: Callable[[], float] = time.time

    @property
    def remote(self) -> bool:
        return not self.options.local_mode

    def require_github(self) -> GitHubClient:
        if self.github is None:
            if not self.config.github_token:
                raise SetupError("GITHUB_TOKEN environment variable is required for remote operations")
            self.github = GitHubClient(self.config.github_token)
        return self.github

    def timestamp(self) -> int:
        return int(self.clock() * 1000)


@dataclass
class JobReport:
    """Repositories processed by a job run."""

    succeeded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def check_setup(context: JobContext) -> None:
    """Fail before touching any repository when remote mode lacks credentials."""
    if context.remote:
        context.require_github()


def iter_targets(context: JobContext) -> List[RepositoryRef]:
    config, options = context.config, context.options
    if options.local_mode:
        names = select_targets(discover_local(config.local_root, config.repo_prefix), options)
    elif options.test_mode and options.repo:
        names = [options.repo]
    else:
        names = select_targets(
            discover_remote(context.require_github(), config.org, config.repo_prefix), options
        )

    if options.test_mode:
        logger.warning("Running in TEST MODE - processing only: %s", ", ".join(names))
    if options.local_mode:
        logger.info("Running in LOCAL MODE - processing local plugins")
    return [
        RepositoryRef(name=repo_name_from(name), clone_url=clone_url_for(name, config.org))
        for name in names
    ]


def run_per_repository(
    context: JobContext,
    label: str,
    handler: Callable[[RepositoryRef, Path], None],
    targets: Sequence[RepositoryRef] | None = None,
) -> JobReport:
    """Run ``handler`` for each target inside its workspace, isolating failures."""
    report = JobReport()
    refs = list(targets) if targets is not None else iter_targets(context)
    for ref in refs:
        logger.info("Processing %s (%s)...", ref.name, label)
        workspace = RepositoryWorkspace(
            ref,
            local_mode=context.options.local_mode,
            temp_dir=context.config.temp_dir,
            local_root=context.config.local_root,
            publisher=context.publisher,
        )
        try:
            with workspace as repo_path:
                handler(ref, repo_path)
        except Exception as exc:
            logger.error("Failed to process %s: %s", ref.name, exc)
            logger.debug("Failure details for %s", ref.name, exc_info=True)
            report.failed.append(ref.name)
        else:
            logger.info("Successfully processed %s", ref.name)
            report.succeeded.append(ref.name)
    logger.info(
        "%s finished: %d succeeded, %d failed", label, len(report.succeeded), len(report.failed)
    )
    return report


def persist_changes(
    context: JobContext,
    ref: RepositoryRef,
    repo_path: Path,
    files: Sequence[Path | str],
    *,
    branch_prefix: str,
    message: str,
    title: str,
    body: str,
) -> Optional[int]:
    """Commit ``files`` on a fresh branch, push it and open a pull request.

    Local mode leaves the written files in place without touching git. A
    pushed branch is left behind when pull request creation fails.
    """
    if not context.remote:
        return None
    branch = f"{branch_prefix}-{context.timestamp()}"
    publisher = context.publisher
    publisher.create_branch(repo_path, branch)
    if not publisher.commit(repo_path, files, message=message):
        logger.info("No changes to commit for %s", ref.name)
        return None
    publisher.push(repo_path, branch)
    pr = context.require_github().create_pull_request(
        context.config.org,
        ref.name,
        title=title,
        body=body,
        head=branch,
        base=context.config.main_branch,
    )
    number = pr.get("number")
    return int(number) if isinstance(number, int) else None


__all__ = [
    "JobContext",
    "JobReport",
    "check_setup",
    "iter_targets",
    "persist_changes",
    "run_per_repository",
]
