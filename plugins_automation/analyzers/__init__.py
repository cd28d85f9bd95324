"""Heuristic extraction of plugin structure from source text."""

from .components import ComponentExtractor, parse_import_aliases
from .env_vars import scan_repository, scan_text
from .plugin import PluginAnalyzer

__all__ = [
    "ComponentExtractor",
    "PluginAnalyzer",
    "parse_import_aliases",
    "scan_repository",
    "scan_text",
]
