"""Field transformations applied to plugin manifests."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

from ..errors import VersionError
from .package_json import PackageManifest

OLD_SCOPE = "@elizaos-plugins/"
NEW_SCOPE = "@elizaos/"

LOCKFILES: tuple[str, ...] = (
    "bun.lockb",
    "bun.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
)

WORKFLOW_PATH = Path(".github") / "workflows" / "npm-deploy.yml"
WORKFLOW_TEMPLATE = Path(__file__).resolve().parents[1] / "assets" / "npm-deploy.yml"

_RELEASE_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
_BETA_PATTERN = re.compile(r"^(\d+\.\d+\.\d+)-beta\.(\d+)$")


def rename_scope(name: str, old: str = OLD_SCOPE, new: str = NEW_SCOPE) -> str:
    """Swap a leading package scope; names already in the new scope are returned unchanged."""
    if name.startswith(new) or not name.startswith(old):
        return name
    return new + name[len(old):]


def apply_scope_rename(
    manifest: PackageManifest, old: str = OLD_SCOPE, new: str = NEW_SCOPE
) -> bool:
    """Rename the manifest's own scope and any dependency keys using it."""
    changed = False
    renamed = rename_scope(manifest.name, old, new)
    if renamed != manifest.name:
        manifest.name = renamed
        changed = True

    for section in ("dependencies", "devDependencies", "peerDependencies"):
        deps = manifest.data.get(section)
        if not isinstance(deps, dict):
            continue
        if not any(key.startswith(old) for key in deps):
            continue
        # Rebuild to keep key order stable.
        manifest.data[section] = {rename_scope(key, old, new): value for key, value in deps.items()}
        changed = True
    return changed


def canonical_repository_url(org: str, repo: str) -> str:
    return f"git+https://github.com/{org}/{repo}.git"


def fix_repository_url(manifest: PackageManifest, org: str, repo: str) -> bool:
    """Point ``repository`` at the canonical GitHub URL. Returns True on change."""
    target = canonical_repository_url(org, repo)
    repository = manifest.data.get("repository")
    if (
        isinstance(repository, dict)
        and repository.get("url") == target
        and repository.get("type") == "git"
    ):
        return False
    if isinstance(repository, dict):
        updated = dict(repository)
        updated["type"] = "git"
        updated["url"] = target
        manifest.data["repository"] = updated
    else:
        manifest.data["repository"] = {"type": "git", "url": target}
    return True


def bump_version(version: str) -> str:
    """Increment the patch number, or the beta counter for ``X.Y.Z-beta.N``."""
    candidate = version.strip()
    beta = _BETA_PATTERN.match(candidate)
    if beta:
        return f"{beta.group(1)}-beta.{int(beta.group(2)) + 1}"
    release = _RELEASE_PATTERN.match(candidate)
    if release:
        major, minor, patch = release.groups()
        return f"{major}.{minor}.{int(patch) + 1}"
    raise VersionError(f"Unsupported version format: {version!r}")


def apply_version_bump(manifest: PackageManifest) -> str:
    new_version = bump_version(manifest.version)
    manifest.version = new_version
    return new_version


def remove_lockfiles(repo_path: Path, names: Sequence[str] = LOCKFILES) -> List[Path]:
    """Delete any lockfiles present at the repository root."""
    removed: List[Path] = []
    for name in names:
        path = repo_path / name
        if path.is_file():
            path.unlink()
            removed.append(path)
    return removed


def workflow_template() -> str:
    return WORKFLOW_TEMPLATE.read_text(encoding="utf-8")


def install_workflow(repo_path: Path, content: str | None = None) -> bool:
    """Write the npm deploy workflow. Returns True when the file changed."""
    target = repo_path / WORKFLOW_PATH
    body = content if content is not None else workflow_template()
    if target.exists() and target.read_text(encoding="utf-8") == body:
        return False
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(body, encoding="utf-8")
    return True


__all__ = [
    "LOCKFILES",
    "NEW_SCOPE",
    "OLD_SCOPE",
    "WORKFLOW_PATH",
    "apply_scope_rename",
    "apply_version_bump",
    "bump_version",
    "canonical_repository_url",
    "fix_repository_url",
    "install_workflow",
    "remove_lockfiles",
    "rename_scope",
    "workflow_template",
]
