"""Package manifest loading and mutation helpers."""

from .mutations import (
    apply_scope_rename,
    apply_version_bump,
    bump_version,
    canonical_repository_url,
    fix_repository_url,
    install_workflow,
    remove_lockfiles,
    rename_scope,
)
from .package_json import PackageManifest

__all__ = [
    "PackageManifest",
    "apply_scope_rename",
    "apply_version_bump",
    "bump_version",
    "canonical_repository_url",
    "fix_repository_url",
    "install_workflow",
    "remove_lockfiles",
    "rename_scope",
]
