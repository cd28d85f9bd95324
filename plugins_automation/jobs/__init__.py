"""Batch jobs exposed as CLI sub-commands."""

from .agent_config import run_agent_config
from .base import JobContext, JobReport, run_per_repository
from .branches import run_migrate_branches
from .download_stats import run_download_stats
from .manifests import run_bump_versions, run_fix_repo_urls, run_release_prep, run_rename_scope
from .readmes import run_readmes

__all__ = [
    "JobContext",
    "JobReport",
    "run_agent_config",
    "run_bump_versions",
    "run_download_stats",
    "run_fix_repo_urls",
    "run_migrate_branches",
    "run_per_repository",
    "run_readmes",
    "run_release_prep",
    "run_rename_scope",
]
