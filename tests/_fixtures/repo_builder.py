"""Helper utilities for constructing temporary plugin repositories in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping


class RepoBuilder:
    """Utility for writing plugin checkouts into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.base = tmp_path / "plugins"
        self.base.mkdir()
        self.root = self.base / "plugin-example"
        self.root.mkdir()

    def write(self, files: Mapping[str, str], *, root: Path | None = None) -> None:
        """Write `path -> contents` entries into the repository."""
        target = root or self.root
        for relative, content in files.items():
            path = target / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def package_json(self, data: Mapping[str, Any], *, root: Path | None = None) -> Path:
        target = (root or self.root) / "package.json"
        target.write_text(json.dumps(dict(data), indent=2) + "\n", encoding="utf-8")
        return target

    def plugin(self, name: str, data: Mapping[str, Any] | None = None) -> Path:
        """Create a sibling plugin checkout under the shared base directory."""
        root = self.base / name
        root.mkdir(exist_ok=True)
        self.package_json(data or {"name": f"@elizaos-plugins/{name}", "version": "1.0.0"}, root=root)
        return root

    def path(self) -> Path:
        """Return the repository root path."""
        return self.root


__all__ = ["RepoBuilder"]
