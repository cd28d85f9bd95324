"""Template-based README rendering used when LLM synthesis is unavailable."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Sequence

from .errors import SetupError
from .models import ComponentInfo, PluginInfo

PACKAGED_TEMPLATE = Path(__file__).resolve().parent / "assets" / "readme-template.md"

_SECTION_SEPARATOR = "\n---\n\n"


def load_readme_template(template_path: Path | None = None) -> str:
    """Return the README template text.

    ``None`` selects the template shipped with the package; an explicit path
    that does not exist is a setup error.
    """
    if template_path is None:
        return PACKAGED_TEMPLATE.read_text(encoding="utf-8")
    if not template_path.is_file():
        raise SetupError(f"README template not found: {template_path}")
    return template_path.read_text(encoding="utf-8")


def render_readme_template(plugin: PluginInfo, template: str) -> str:
    """Substitute ``{{PLACEHOLDER}}`` markers in ``template`` with plugin facts."""
    replacements: Dict[str, str] = {
        "PLUGIN_NAME": plugin.package_name,
        "PLUGIN_DESCRIPTION": plugin.description,
        "PACKAGE_NAME": plugin.package_name,
        "REPOSITORY_URL": plugin.repository,
        "ENV_VARS": _env_vars_block(plugin.env_vars),
        "ACTIONS_LIST": _summary_list(plugin.actions, "actions"),
        "SERVICES_LIST": _summary_list(plugin.services, "services"),
        "PROVIDERS_LIST": _summary_list(plugin.providers, "providers"),
        "ACTIONS_DETAILED": _detailed(plugin.actions, _action_section, "actions"),
        "SERVICES_DETAILED": _detailed(plugin.services, _service_section, "services"),
        "PROVIDERS_DETAILED": _detailed(plugin.providers, _provider_section, "providers"),
    }
    readme = template
    for key, value in replacements.items():
        readme = readme.replace("{{" + key + "}}", value)
    return readme


def _env_vars_block(env_vars: Sequence[str]) -> str:
    if not env_vars:
        return "# No environment variables required"
    return "\n".join(f"{name}=your_{name.lower()}_here" for name in env_vars)


def _summary_list(components: Sequence[ComponentInfo], kind: str) -> str:
    if not components:
        return f"- No {kind} available"
    return "\n".join(
        f"- **{component.name}**: <!-- TODO: Add description -->" for component in components
    )


def _detailed(
    components: Sequence[ComponentInfo],
    render: Callable[[ComponentInfo], str],
    kind: str,
) -> str:
    if not components:
        return f"No {kind} found in this plugin."
    return _SECTION_SEPARATOR.join(render(component) for component in components)


def _action_section(action: ComponentInfo) -> str:
    lines: List[str] = [f"#### {action.name}", "", action.description or "Description of this action", ""]
    if action.parameters:
        lines.extend(
            [
                "**Parameters:**",
                "",
                "| Parameter | Type | Required | Description |",
                "|-----------|------|----------|-------------|",
            ]
        )
        for param in action.parameters:
            required = "Yes" if param.required else "No"
            lines.append(f"| `{param.name}` | `{param.type}` | {required} | {param.description} |")
        lines.append("")
    else:
        lines.extend(["**Parameters:** This action does not require any parameters.", ""])

    usage = action.usage_example or (
        f"await runtime.useAction('{action.name}', {{ /* parameters */ }});"
    )
    lines.extend(_code_block(f"// Example usage of {action.name}\n{usage}", "**Usage:**"))
    if action.return_type:
        lines.extend(_code_block(action.return_type, "**Output:**"))
    if action.aliases:
        lines.extend([f"**Aliases:** {', '.join(action.aliases)}", ""])
    return "\n".join(lines) + "\n"


def _service_section(service: ComponentInfo) -> str:
    lines: List[str] = [f"#### {service.name}", "", service.description or "Description of this service", ""]
    if service.methods:
        lines.extend(["**Methods:**", ""])
        for method in service.methods:
            summary = method.description or "Method description"
            lines.append(f"- `{method.name}({method.parameters})`: {summary}")
        lines.append("")
    if service.configuration:
        lines.extend(_code_block(service.configuration, "**Configuration:**"))
    usage = service.usage_example or (
        f"const service = runtime.getService('{service.name}');\n// Use service methods here"
    )
    lines.extend(_code_block(usage, "**Usage Example:**"))
    return "\n".join(lines) + "\n"


def _provider_section(provider: ComponentInfo) -> str:
    lines: List[str] = [f"#### {provider.name}", "", provider.description or "Description of this provider", ""]
    lines.extend(_code_block(provider.return_type or "// Context structure", "**Provided Context:**"))
    usage = provider.usage_example or "// Context is automatically included in agent prompts"
    lines.extend(
        _code_block(
            f"// The {provider.name} provider supplies the following context\n{usage}",
            "**Usage:**",
        )
    )
    lines.extend(
        [
            "**When This Provider Runs:**",
            provider.configuration
            or "This provider runs before each agent action to supply relevant context.",
            "",
        ]
    )
    return "\n".join(lines) + "\n"


def _code_block(body: str, heading: str) -> List[str]:
    return [heading, "```typescript", body, "```", ""]


__all__ = ["load_readme_template", "render_readme_template"]
