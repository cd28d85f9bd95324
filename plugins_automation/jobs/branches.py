"""Create a branch from another branch across plugin repositories."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import SetupError
from ..logging import get_logger
from ..models import RepositoryRef
from .base import JobContext, JobReport, check_setup, run_per_repository

logger = get_logger("jobs.branches")


def run_migrate_branches(
    context: JobContext,
    *,
    target_branch: str,
    source_branch: Optional[str] = None,
    set_default: bool = False,
) -> JobReport:
    """Push ``target_branch`` (cut from ``source_branch``) to every repository.

    Repositories that already have the target branch on ``origin`` are left
    untouched. With ``set_default`` the target becomes the default branch.
    """
    if context.options.local_mode:
        raise SetupError("migrate-branches operates on remote repositories only")
    check_setup(context)
    source = source_branch or context.config.main_branch
    if source == target_branch:
        raise SetupError("Source and target branch must differ")

    def handle(ref: RepositoryRef, repo_path: Path) -> None:
        publisher = context.publisher
        if publisher.remote_branch_exists(repo_path, target_branch):
            logger.info("%s already has branch %s; skipping", ref.name, target_branch)
            return
        publisher.fetch(repo_path)
        publisher.create_branch(repo_path, target_branch, f"origin/{source}")
        publisher.push(repo_path, target_branch)
        logger.info("%s: created %s from %s", ref.name, target_branch, source)
        if set_default:
            context.require_github().set_default_branch(context.config.org, ref.name, target_branch)
            logger.info("%s: default branch set to %s", ref.name, target_branch)

    return run_per_repository(context, "migrate-branches", handle)


__all__ = ["run_migrate_branches"]
