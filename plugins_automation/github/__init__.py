"""GitHub REST access and repository discovery."""

from .client import GitHubClient
from .repos import (
    RepositoryWorkspace,
    discover_local,
    discover_remote,
    repo_name_from,
    select_targets,
)

__all__ = [
    "GitHubClient",
    "RepositoryWorkspace",
    "discover_local",
    "discover_remote",
    "repo_name_from",
    "select_targets",
]
