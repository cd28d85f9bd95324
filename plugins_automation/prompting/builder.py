"""Builds chat-completion prompts from extracted plugin facts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import ComponentInfo, PluginInfo
from .constants import (
    ACTION_EXCERPT_CHARS,
    AGENT_CONFIG_SYSTEM_PROMPT,
    DEFAULT_DESCRIPTION,
    DEFAULT_REPOSITORY,
    PRESERVED_SECTIONS,
    README_SYSTEM_PROMPT,
    SOURCE_EXCERPT_CHARS,
    TRUNCATION_MARKER,
)


@dataclass(frozen=True)
class Prompt:
    """System and user messages for a single completion call."""

    system: str
    user: str


@dataclass
class _ComponentView:
    name: str
    file_path: str
    excerpt: str
    description: Optional[str] = None
    aliases: Sequence[str] = ()
    parameters: Sequence[object] = ()


def excerpt(source: Optional[str], limit: int) -> str:
    """Return at most ``limit`` characters of ``source`` plus a truncation marker."""
    if not source:
        return ""
    if len(source) <= limit:
        return source
    return source[:limit] + TRUNCATION_MARKER


class PromptBuilder:
    """Renders Jinja2 prompt templates for README and agent-config synthesis."""

    README_TEMPLATE = "readme_prompt.md.j2"
    AGENT_CONFIG_TEMPLATE = "agent_config_prompt.md.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def build_readme_prompt(
        self,
        plugin: PluginInfo,
        readme_template: str,
        existing_readme: str | None = None,
    ) -> Prompt:
        existing = existing_readme if existing_readme and existing_readme.strip() else ""
        template = self._env.get_template(self.README_TEMPLATE)
        user = template.render(
            plugin=plugin,
            default_description=DEFAULT_DESCRIPTION,
            default_repository=DEFAULT_REPOSITORY,
            component_groups=[
                ("Actions", [item.name for item in plugin.actions]),
                ("Services", [item.name for item in plugin.services]),
                ("Providers", [item.name for item in plugin.providers]),
                ("Environment Variables", list(plugin.env_vars)),
            ],
            existing_readme=existing,
            preserved_sections=PRESERVED_SECTIONS,
            actions=[self._view(item, ACTION_EXCERPT_CHARS) for item in plugin.actions],
            source_groups=[
                ("SERVICE SOURCE CODE", self._source_views(plugin.services)),
                ("PROVIDER SOURCE CODE", self._source_views(plugin.providers)),
            ],
            template=readme_template,
        )
        return Prompt(system=README_SYSTEM_PROMPT, user=user.strip() + "\n")

    def build_agent_config_prompt(
        self,
        package_name: str,
        env_vars: Sequence[str],
        *,
        description: str = "",
        contexts: Mapping[str, str] | None = None,
    ) -> Prompt:
        template = self._env.get_template(self.AGENT_CONFIG_TEMPLATE)
        user = template.render(
            package_name=package_name,
            description=description,
            env_vars=list(env_vars),
            contexts=dict(contexts or {}),
        )
        return Prompt(system=AGENT_CONFIG_SYSTEM_PROMPT, user=user.strip() + "\n")

    @staticmethod
    def _view(component: ComponentInfo, limit: int) -> _ComponentView:
        return _ComponentView(
            name=component.name,
            file_path=component.file_path or "",
            excerpt=excerpt(component.source_code, limit),
            description=component.description,
            aliases=list(component.aliases),
            parameters=list(component.parameters),
        )

    def _source_views(self, components: Sequence[ComponentInfo]) -> List[_ComponentView]:
        # Components without located source are left out.
        return [
            self._view(component, SOURCE_EXCERPT_CHARS)
            for component in components
            if component.source_code
        ]


__all__ = ["Prompt", "PromptBuilder", "excerpt"]
