"""Jobs that rewrite package.json fields: scope, repository URL, version, release prep."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

from ..logging import get_logger
from ..manifest import (
    PackageManifest,
    apply_scope_rename,
    apply_version_bump,
    fix_repository_url,
    install_workflow,
    remove_lockfiles,
)
from ..manifest.mutations import WORKFLOW_PATH
from ..manifest.package_json import MANIFEST_FILENAME
from ..models import RepositoryRef
from .base import JobContext, JobReport, check_setup, persist_changes, run_per_repository

logger = get_logger("jobs.manifests")

# Returns the repository-relative paths it changed; empty means nothing to persist.
Mutation = Callable[[RepositoryRef, Path, PackageManifest], List[str]]


def _manifest_job(
    context: JobContext,
    label: str,
    mutate: Mutation,
    *,
    branch_prefix: str,
    message: str,
    title: str,
    body: str,
) -> JobReport:
    check_setup(context)

    def handle(ref: RepositoryRef, repo_path: Path) -> None:
        manifest = PackageManifest.load(repo_path)
        changed = mutate(ref, repo_path, manifest)
        if not changed:
            logger.info("%s: nothing to change", ref.name)
            return
        logger.info("%s: updated %s", ref.name, ", ".join(changed))
        persist_changes(
            context,
            ref,
            repo_path,
            changed,
            branch_prefix=branch_prefix,
            message=message,
            title=title,
            body=f"{body}\n\nGenerated by the plugins-automation script.",
        )

    return run_per_repository(context, label, handle)


def _save(manifest: PackageManifest) -> List[str]:
    return [MANIFEST_FILENAME] if manifest.save() else []


def run_rename_scope(context: JobContext) -> JobReport:
    def mutate(ref: RepositoryRef, repo_path: Path, manifest: PackageManifest) -> List[str]:
        apply_scope_rename(manifest)
        return _save(manifest)

    return _manifest_job(
        context,
        "rename-scope",
        mutate,
        branch_prefix="rename-scope",
        message="chore: rename package scope to @elizaos",
        title="chore: Rename package scope to @elizaos",
        body="This PR moves the package and its dependencies from `@elizaos-plugins/` to `@elizaos/`.",
    )


def run_fix_repo_urls(context: JobContext) -> JobReport:
    org = context.config.org

    def mutate(ref: RepositoryRef, repo_path: Path, manifest: PackageManifest) -> List[str]:
        fix_repository_url(manifest, org, ref.name)
        return _save(manifest)

    return _manifest_job(
        context,
        "fix-repo-urls",
        mutate,
        branch_prefix="fix-repository-url",
        message="chore: fix repository url in package.json",
        title="chore: Fix repository URL in package.json",
        body="This PR points `repository.url` at the canonical GitHub location.",
    )


def run_bump_versions(context: JobContext) -> JobReport:
    def mutate(ref: RepositoryRef, repo_path: Path, manifest: PackageManifest) -> List[str]:
        old = manifest.version
        new = apply_version_bump(manifest)
        logger.info("%s: %s -> %s", ref.name, old, new)
        return _save(manifest)

    return _manifest_job(
        context,
        "bump-versions",
        mutate,
        branch_prefix="bump-version",
        message="chore: bump version",
        title="chore: Bump version",
        body="This PR bumps the package version.",
    )


def run_release_prep(context: JobContext) -> JobReport:
    def mutate(ref: RepositoryRef, repo_path: Path, manifest: PackageManifest) -> List[str]:
        old = manifest.version
        new = apply_version_bump(manifest)
        logger.info("%s: %s -> %s", ref.name, old, new)
        changed = _save(manifest)
        if install_workflow(repo_path):
            changed.append(WORKFLOW_PATH.as_posix())
        changed.extend(_relative(repo_path, path) for path in remove_lockfiles(repo_path))
        return changed

    return _manifest_job(
        context,
        "release-prep",
        mutate,
        branch_prefix="release-prep",
        message="chore: prepare release",
        title="chore: Prepare release",
        body=(
            "This PR bumps the version and installs the npm deploy workflow. "
            "Lockfiles are removed so the next publish resolves fresh dependencies."
        ),
    )


def _relative(root: Path, path: Path) -> str:
    return path.relative_to(root).as_posix()


__all__ = [
    "run_bump_versions",
    "run_fix_repo_urls",
    "run_release_prep",
    "run_rename_scope",
]
