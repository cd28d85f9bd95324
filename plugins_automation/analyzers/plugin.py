"""Assemble PluginInfo records from a plugin checkout."""

from __future__ import annotations

from pathlib import Path

from ..logging import get_logger
from ..manifest import PackageManifest, rename_scope
from ..models import PluginInfo
from .components import ComponentExtractor, read_index
from .env_vars import scan_repository

_TEST_DIRS = ("__tests__", "src/__tests__")


class PluginAnalyzer:
    """Reads the manifest, entry file and sources of a plugin repository."""

    def __init__(self, extractor: ComponentExtractor | None = None) -> None:
        self.extractor = extractor or ComponentExtractor()
        self.logger = get_logger("analyzers.plugin")

    def analyze(self, repo_path: Path) -> PluginInfo:
        manifest = PackageManifest.load(repo_path)
        package_name = rename_scope(manifest.name)
        info = PluginInfo(
            name=package_name,
            description=manifest.description,
            package_name=package_name,
            repository=manifest.repository_url,
            dependencies=manifest.dependency_names(),
            has_tests=any((repo_path / candidate).exists() for candidate in _TEST_DIRS),
        )

        self.extractor.extract(repo_path, read_index(repo_path), info)
        info.env_vars = scan_repository(repo_path)

        self.logger.info(
            "Extracted %s: %d actions, %d services, %d providers, %d env vars",
            package_name or repo_path.name,
            len(info.actions),
            len(info.services),
            len(info.providers),
            len(info.env_vars),
        )
        return info


__all__ = ["PluginAnalyzer"]
