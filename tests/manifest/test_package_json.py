"""Tests for package.json loading and writing."""

from __future__ import annotations

import json

from plugins_automation.manifest import PackageManifest


def test_manifest_exposes_fields(repo_builder) -> None:
    repo_builder.package_json(
        {
            "name": "@elizaos-plugins/plugin-example",
            "version": "1.2.3",
            "description": "Example plugin",
            "repository": {"type": "git", "url": "https://github.com/x/y"},
            "dependencies": {"@elizaos/core": "^1.0.0", "zod": "^3.0.0"},
        }
    )

    manifest = PackageManifest.load(repo_builder.path())

    assert manifest.path == repo_builder.path() / "package.json"
    assert manifest.name == "@elizaos-plugins/plugin-example"
    assert manifest.version == "1.2.3"
    assert manifest.description == "Example plugin"
    assert manifest.repository_url == "https://github.com/x/y"
    assert manifest.dependency_names() == ["@elizaos/core", "zod"]


def test_manifest_accepts_string_repository(repo_builder) -> None:
    repo_builder.package_json({"name": "x", "repository": "github:x/y"})

    assert PackageManifest.load(repo_builder.path()).repository_url == "github:x/y"


def test_save_skips_unchanged_manifest(repo_builder) -> None:
    path = repo_builder.path() / "package.json"
    path.write_text('{"name":"x","version":"1.0.0"}', encoding="utf-8")

    manifest = PackageManifest.load(path)

    assert manifest.save() is False
    assert path.read_text(encoding="utf-8") == '{"name":"x","version":"1.0.0"}'


def test_save_writes_two_space_json_with_newline(repo_builder) -> None:
    path = repo_builder.package_json({"name": "x", "version": "1.0.0"})
    manifest = PackageManifest.load(path)

    manifest.version = "1.0.1"

    assert manifest.save() is True
    text = path.read_text(encoding="utf-8")
    assert text == '{\n  "name": "x",\n  "version": "1.0.1"\n}\n'
    assert json.loads(text)["version"] == "1.0.1"
    assert manifest.save() is False
