"""Read and write package.json manifests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

MANIFEST_FILENAME = "package.json"


@dataclass
class PackageManifest:
    """A parsed package.json plus the text it was loaded from."""

    path: Path
    data: Dict[str, Any]
    _original: str = field(default="", repr=False)

    @classmethod
    def load(cls, repo_path: Path | str) -> "PackageManifest":
        path = Path(repo_path)
        if path.is_dir():
            path = path / MANIFEST_FILENAME
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a JSON object")
        return cls(path=path, data=data, _original=text)

    @property
    def name(self) -> str:
        value = self.data.get("name")
        return value if isinstance(value, str) else ""

    @name.setter
    def name(self, value: str) -> None:
        self.data["name"] = value

    @property
    def version(self) -> str:
        value = self.data.get("version")
        return value if isinstance(value, str) else ""

    @version.setter
    def version(self, value: str) -> None:
        self.data["version"] = value

    @property
    def description(self) -> str:
        value = self.data.get("description")
        return value if isinstance(value, str) else ""

    @property
    def repository_url(self) -> str:
        repository = self.data.get("repository")
        if isinstance(repository, dict):
            url = repository.get("url")
            return url if isinstance(url, str) else ""
        if isinstance(repository, str):
            return repository
        return ""

    @property
    def dependencies(self) -> Dict[str, str]:
        deps = self.data.get("dependencies")
        return deps if isinstance(deps, dict) else {}

    def dependency_names(self) -> List[str]:
        return list(self.dependencies.keys())

    def render(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"

    @property
    def changed(self) -> bool:
        if not self._original:
            return True
        try:
            return json.loads(self._original) != self.data
        except json.JSONDecodeError:
            return True

    def save(self) -> bool:
        """Write the manifest back when its contents differ from what was loaded."""
        if not self.changed:
            return False
        text = self.render()
        self.path.write_text(text, encoding="utf-8")
        self._original = text
        return True


__all__ = ["MANIFEST_FILENAME", "PackageManifest"]
