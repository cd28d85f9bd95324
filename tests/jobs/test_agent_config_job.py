"""Tests for agentConfig synthesis."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from plugins_automation.jobs import run_agent_config
from plugins_automation.jobs.agent_config import (
    PLUGIN_TYPE,
    AgentConfigDescriber,
    apply_agent_config,
    default_parameter,
    is_sensitive,
    parse_descriptions,
)
from plugins_automation.manifest import PackageManifest


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("OPENAI_API_KEY", True),
        ("DISCORD_TOKEN", True),
        ("wallet_private_key", True),
        ("DB_PASSWORD", True),
        ("LOG_LEVEL", False),
    ],
)
def test_is_sensitive(name: str, expected: bool) -> None:
    assert is_sensitive(name) is expected


def test_default_parameter() -> None:
    assert default_parameter("API_SECRET") == {
        "type": "string",
        "description": "Value for api secret.",
        "required": False,
        "sensitive": True,
    }


def test_parse_descriptions_reads_fenced_json_and_normalises() -> None:
    raw = """Here you go:
```json
{
  "API_KEY": {"type": "string", "description": " Key for the API. ", "required": true, "sensitive": false},
  "TIMEOUT": {"type": "integer", "description": ""},
  "EXTRA": {"type": "string"}
}
```"""

    result = parse_descriptions(raw, ["API_KEY", "TIMEOUT", "PORT"])

    assert list(result) == ["API_KEY", "TIMEOUT", "PORT"]
    assert result["API_KEY"] == {
        "type": "string",
        "description": "Key for the API.",
        "required": True,
        "sensitive": True,
    }
    assert result["TIMEOUT"]["type"] == "string"
    assert result["TIMEOUT"]["description"] == "Value for timeout."
    assert result["PORT"] == default_parameter("PORT")


def test_parse_descriptions_rejects_non_object() -> None:
    with pytest.raises(ValueError):
        parse_descriptions("[1, 2]", ["A"])


def test_describer_falls_back_to_defaults_on_bad_answer(caplog) -> None:
    runner = MagicMock()
    runner.enabled = True
    runner.run.return_value = "not json"

    result = AgentConfigDescriber(runner).describe("@elizaos/plugin-x", ["BOT_TOKEN"])

    assert result == {"BOT_TOKEN": default_parameter("BOT_TOKEN")}
    assert "AI description failed for @elizaos/plugin-x" in caplog.text


def test_describer_skips_model_when_disabled() -> None:
    runner = MagicMock()
    runner.enabled = True

    result = AgentConfigDescriber(runner, use_ai=False).describe("pkg", ["PORT"])

    assert result == {"PORT": default_parameter("PORT")}
    runner.run.assert_not_called()


def test_apply_agent_config_keeps_documented_entries(repo_builder) -> None:
    existing = {"type": "string", "description": "Hand written", "required": True, "sensitive": True}
    repo_builder.package_json(
        {"name": "x", "agentConfig": {"pluginType": "custom", "pluginParameters": {"API_KEY": existing}}}
    )
    manifest = PackageManifest.load(repo_builder.path())

    apply_agent_config(
        manifest,
        {"API_KEY": default_parameter("API_KEY"), "PORT": default_parameter("PORT")},
    )

    section = manifest.data["agentConfig"]
    assert section["pluginType"] == "custom"
    assert section["pluginParameters"]["API_KEY"] == existing
    assert section["pluginParameters"]["PORT"] == default_parameter("PORT")


def test_run_agent_config_local_writes_manifest(repo_builder, make_context) -> None:
    repo_builder.package_json({"name": "@elizaos-plugins/plugin-example", "version": "1.0.0"})
    repo_builder.write(
        {"src/index.ts": "const key = runtime.getSetting('EXAMPLE_API_KEY');\nprocess.env.PORT;\n"}
    )
    bare = repo_builder.plugin("plugin-bare")

    report = run_agent_config(make_context(local_mode=True, no_ai=True))

    assert report.succeeded == ["plugin-bare", "plugin-example"]
    data = json.loads((repo_builder.path() / "package.json").read_text(encoding="utf-8"))
    assert data["agentConfig"]["pluginType"] == PLUGIN_TYPE
    assert sorted(data["agentConfig"]["pluginParameters"]) == ["EXAMPLE_API_KEY", "PORT"]
    assert data["agentConfig"]["pluginParameters"]["EXAMPLE_API_KEY"]["sensitive"] is True
    assert "agentConfig" not in json.loads((bare / "package.json").read_text(encoding="utf-8"))


def test_run_agent_config_passes_usage_context_to_describer(repo_builder, make_context) -> None:
    repo_builder.package_json({"name": "@elizaos-plugins/plugin-example", "description": "Demo"})
    repo_builder.write({"src/config.ts": "  const port = process.env.PORT ?? 3000;\n"})
    describer = MagicMock()
    describer.describe.return_value = {"PORT": default_parameter("PORT")}

    run_agent_config(make_context(local_mode=True), describer=describer)

    describer.describe.assert_called_once_with(
        "@elizaos/plugin-example",
        ["PORT"],
        description="Demo",
        contexts={"PORT": "const port = process.env.PORT ?? 3000;"},
    )
