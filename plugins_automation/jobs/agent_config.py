"""Describe each plugin's environment variables in package.json ``agentConfig``."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from ..analyzers.env_vars import scan_repository, usage_lines
from ..llm import LLMRunner
from ..logging import get_logger
from ..manifest import PackageManifest, rename_scope
from ..manifest.package_json import MANIFEST_FILENAME
from ..models import RepositoryRef
from ..prompting.builder import PromptBuilder
from .base import JobContext, JobReport, check_setup, persist_changes, run_per_repository

PLUGIN_TYPE = "elizaos:plugin:1.0.0"
SENSITIVE_MARKERS = ("KEY", "SECRET", "TOKEN", "PASSWORD", "PRIVATE")
PARAMETER_TYPES = ("string", "number", "boolean")
BRANCH_PREFIX = "add-agent-config"
COMMIT_MESSAGE = "feat: add agentConfig environment variable metadata"
PR_TITLE = "feat: Add agentConfig environment variable metadata"
PR_BODY = (
    "This PR adds an `agentConfig` section to package.json describing the environment "
    "variables the plugin reads.\n\nGenerated by the plugins-automation script."
)

_JSON_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)

logger = get_logger("jobs.agent_config")


def is_sensitive(name: str) -> bool:
    upper = name.upper()
    return any(marker in upper for marker in SENSITIVE_MARKERS)


def default_parameter(name: str) -> Dict[str, Any]:
    words = name.lower().replace("_", " ")
    return {
        "type": "string",
        "description": f"Value for {words}.",
        "required": False,
        "sensitive": is_sensitive(name),
    }


def parse_descriptions(raw: str, names: Sequence[str]) -> Dict[str, Dict[str, Any]]:
    """Parse the model's JSON answer, keeping only the requested variable names.

    Missing or malformed entries fall back to :func:`default_parameter`.
    """
    fenced = _JSON_FENCE.search(raw)
    text = fenced.group(1) if fenced else raw
    payload = json.loads(text.strip())
    if not isinstance(payload, dict):
        raise ValueError("Model response is not a JSON object")
    result: Dict[str, Dict[str, Any]] = {}
    for name in names:
        result[name] = _normalise_parameter(name, payload.get(name))
    return result


def _normalise_parameter(name: str, entry: Any) -> Dict[str, Any]:
    fallback = default_parameter(name)
    if not isinstance(entry, dict):
        return fallback
    kind = entry.get("type")
    text = entry.get("description")
    description = text.strip() if isinstance(text, str) else ""
    return {
        "type": kind if kind in PARAMETER_TYPES else fallback["type"],
        "description": description or fallback["description"],
        "required": bool(entry.get("required", fallback["required"])),
        "sensitive": bool(entry.get("sensitive")) or fallback["sensitive"],
    }


class AgentConfigDescriber:
    """Produces ``pluginParameters`` entries, preferring the model when available."""

    def __init__(
        self,
        runner: LLMRunner | None = None,
        *,
        prompt_builder: PromptBuilder | None = None,
        use_ai: bool = True,
    ) -> None:
        self.runner = runner
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.use_ai = use_ai

    def describe(
        self,
        package_name: str,
        names: Sequence[str],
        *,
        description: str = "",
        contexts: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Dict[str, Any]]:
        if self.use_ai and self.runner is not None and self.runner.enabled:
            prompt = self.prompt_builder.build_agent_config_prompt(
                package_name, names, description=description, contexts=contexts
            )
            try:
                return parse_descriptions(self.runner.run(prompt.user, system=prompt.system), names)
            except Exception as exc:
                logger.warning(
                    "AI description failed for %s, using defaults: %s", package_name, exc
                )
        return {name: default_parameter(name) for name in names}


def apply_agent_config(manifest: PackageManifest, parameters: Mapping[str, Dict[str, Any]]) -> None:
    """Merge ``parameters`` into ``agentConfig``, keeping entries already documented."""
    section = manifest.data.get("agentConfig")
    existing = section.get("pluginParameters") if isinstance(section, dict) else None
    merged: Dict[str, Any] = dict(existing) if isinstance(existing, dict) else {}
    for name, entry in parameters.items():
        merged.setdefault(name, entry)
    updated = dict(section) if isinstance(section, dict) else {}
    updated["pluginType"] = updated.get("pluginType") or PLUGIN_TYPE
    updated["pluginParameters"] = merged
    manifest.data["agentConfig"] = updated


def run_agent_config(context: JobContext, *, describer: AgentConfigDescriber | None = None) -> JobReport:
    check_setup(context)
    if describer is None:
        describer = AgentConfigDescriber(
            LLMRunner.from_config(context.config.llm), use_ai=not context.options.no_ai
        )

    def handle(ref: RepositoryRef, repo_path: Path) -> None:
        names = scan_repository(repo_path)
        if not names:
            logger.info("No environment variables found in %s; skipping", ref.name)
            return
        manifest = PackageManifest.load(repo_path)
        parameters = describer.describe(
            rename_scope(manifest.name),
            names,
            description=manifest.description,
            contexts=usage_lines(repo_path, names),
        )
        apply_agent_config(manifest, parameters)
        if not manifest.save():
            logger.info("agentConfig already up to date for %s", ref.name)
            return
        logger.info("Documented %d environment variables for %s", len(names), ref.name)
        persist_changes(
            context,
            ref,
            repo_path,
            [MANIFEST_FILENAME],
            branch_prefix=BRANCH_PREFIX,
            message=COMMIT_MESSAGE,
            title=PR_TITLE,
            body=PR_BODY,
        )

    return run_per_repository(context, "agent-config", handle)


__all__ = [
    "AgentConfigDescriber",
    "PLUGIN_TYPE",
    "apply_agent_config",
    "default_parameter",
    "is_sensitive",
    "parse_descriptions",
    "run_agent_config",
]
