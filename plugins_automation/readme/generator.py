"""README synthesis: LLM first, template fallback."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..failsafe import load_readme_template, render_readme_template
from ..llm import LLMRunner
from ..logging import get_logger
from ..models import PluginInfo
from ..prompting.builder import PromptBuilder
from ..validators import ReadmeValidator

PREVIEW_CHARS = 500


class ReadmeGenerator:
    """Produces README text for a plugin.

    The model is consulted only when an API key is configured and ``use_ai`` is
    set. Any failure on that path (transport error, empty answer, validation
    rejection) is logged and the deterministic template rendering is returned
    instead.
    """

    def __init__(
        self,
        runner: LLMRunner | None = None,
        *,
        prompt_builder: PromptBuilder | None = None,
        validator: ReadmeValidator | None = None,
        template_path: Path | None = None,
        use_ai: bool = True,
    ) -> None:
        self.runner = runner
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.validator = validator or ReadmeValidator()
        self.template = load_readme_template(template_path)
        self.use_ai = use_ai
        self.logger = get_logger("readme")

    @property
    def ai_enabled(self) -> bool:
        return self.use_ai and self.runner is not None and self.runner.enabled

    def generate(self, plugin: PluginInfo, existing: Optional[str] = None) -> str:
        if self.ai_enabled and self.runner is not None:
            try:
                readme = self._generate_with_llm(self.runner, plugin, existing)
            except Exception as exc:
                self.logger.warning(
                    "AI generation failed for %s, falling back to template: %s",
                    plugin.package_name,
                    exc,
                )
            else:
                self.logger.info("Generated README with AI enhancement for %s", plugin.package_name)
                return readme
        else:
            self.logger.debug("AI generation disabled; rendering template for %s", plugin.package_name)
        return self.render_template(plugin)

    def render_template(self, plugin: PluginInfo) -> str:
        return render_readme_template(plugin, self.template)

    def _generate_with_llm(
        self, runner: LLMRunner, plugin: PluginInfo, existing: Optional[str]
    ) -> str:
        prompt = self.prompt_builder.build_readme_prompt(plugin, self.template, existing)
        readme = runner.run(prompt.user, system=prompt.system)
        self.validator.validate(readme, existing)
        self.logger.debug("Generated README preview:\n%s...", readme[:PREVIEW_CHARS])
        return readme.strip()


__all__ = ["ReadmeGenerator"]
