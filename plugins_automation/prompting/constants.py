"""Shared constants for README prompting and validation."""

from __future__ import annotations

README_SYSTEM_PROMPT = (
    "You are a documentation PRESERVATIONIST and enhancer. Your PRIMARY DIRECTIVE is to NEVER "
    "delete existing content. You must KEEP ALL existing sections including Future Enhancements, "
    "Credits, Security Best Practices, etc. You ADD and ENHANCE, but NEVER REMOVE. If you see a "
    "section in the existing README, it MUST appear in your output."
)

AGENT_CONFIG_SYSTEM_PROMPT = (
    "You document plugin configuration. Answer with a single JSON object and nothing else. "
    "Never invent variables that are not listed."
)

PRESERVED_SECTIONS: tuple[str, ...] = (
    "Future Enhancements",
    "Credits",
    "Security Best Practices",
    "Development Guide",
)

ACTION_EXCERPT_CHARS = 1500
SOURCE_EXCERPT_CHARS = 2000
TRUNCATION_MARKER = "\n... [truncated]"

DEFAULT_DESCRIPTION = "A plugin for ElizaOS that extends agent capabilities."
DEFAULT_REPOSITORY = "https://github.com/elizaos/eliza"


__all__ = [
    "ACTION_EXCERPT_CHARS",
    "AGENT_CONFIG_SYSTEM_PROMPT",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_REPOSITORY",
    "PRESERVED_SECTIONS",
    "README_SYSTEM_PROMPT",
    "SOURCE_EXCERPT_CHARS",
    "TRUNCATION_MARKER",
]
