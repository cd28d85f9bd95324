"""Best-effort recovery of the actions, services and providers a plugin registers.

Nothing here parses TypeScript. The entry file is scanned with a series of
regular expressions, so results can include false positives or miss
components entirely; callers treat the output as raw material for
documentation only.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from ..logging import get_logger
from ..models import ComponentInfo, MethodInfo, ParameterInfo, PluginInfo

ACTIONS = "actions"
SERVICES = "services"
PROVIDERS = "providers"

INDEX_CANDIDATES: tuple[str, ...] = (
    "src/index.ts",
    "src/index.js",
    "index.ts",
    "index.js",
)

_SOURCE_SUFFIXES = (".ts", ".js")

_KEYWORDS = frozenset(
    {
        "const",
        "let",
        "var",
        "function",
        "class",
        "import",
        "export",
        "new",
        "return",
        "if",
        "else",
        "for",
        "while",
        "do",
        "break",
        "continue",
    }
)

_CONTROL_WORDS = frozenset({"if", "for", "while", "switch", "catch", "function", "return"})


def _array_patterns(kind: str, *, include_default_export: bool) -> List[re.Pattern[str]]:
    patterns = [
        re.compile(rf"{kind}:\s*\[(.*?)\]", re.S),
        re.compile(rf"export\s+const\s+{kind}\s*=\s*\[(.*?)\]", re.S),
        re.compile(rf"\.{kind}\s*=\s*\[(.*?)\]", re.S),
    ]
    if include_default_export:
        patterns.append(re.compile(rf"export\s+default\s+{{\s*[^}}]*{kind}:\s*\[(.*?)\]", re.S))
    return patterns


_ARRAY_PATTERNS: Dict[str, List[re.Pattern[str]]] = {
    ACTIONS: _array_patterns(ACTIONS, include_default_export=True),
    SERVICES: _array_patterns(SERVICES, include_default_export=False),
    PROVIDERS: _array_patterns(PROVIDERS, include_default_export=True),
}

_LINE_COMMENT = re.compile(r"//.*$", re.M)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_WORD = re.compile(r"\b[a-zA-Z_]\w+\b")
_SERVICE_WORD = re.compile(r"\w+Service\b")
_INLINE_NAME = re.compile(r"{[^}]*name:\s*[\"'](\w+)[\"'][^}]*}")
_EXPORT_DECL = re.compile(r"export\s+(?:const|class|function)\s+(\w+)")
_DEFAULT_EXPORT_NAME = re.compile(r"export\s+default\s+{[^}]*name:\s*[\"'](\w+)[\"']", re.S)
_EVENTS = re.compile(r"events:\s*\[(.*?)\]", re.S)
_EVALUATORS = re.compile(r"evaluators:\s*\[(.*?)\]", re.S)

_JSDOC = re.compile(
    r"/\*\*([\s\S]*?)\*/\s*(?:export\s+)?(?:const|class|function|interface)\s+(\w+)"
)
_JSDOC_DESCRIPTION = re.compile(r"@description\s+(.+)|^\s*\*\s+([^@\s].+)", re.M)
_INTERFACE_FIELD = re.compile(r"^\s*(\w+)(\?)?:\s*([^;/\n]+);?\s*(?://\s*(.+))?", re.M)
_ZOD_FIELD = re.compile(r"(\w+):\s*z\.(\w+)\((.*?)\)((?:\.\w+\(.*?\))*)")
_ALIASES = re.compile(r"aliases\s*:\s*\[([^\]]+)\]")
_METHOD = re.compile(r"(?:async\s+)?(\w+)\s*\(([^)]*)\)\s*(?::\s*[^{;]+)?\s*{")

logger = get_logger("analyzers.components")


def strip_comments(text: str) -> str:
    return _BLOCK_COMMENT.sub("", _LINE_COMMENT.sub("", text))


def parse_import_aliases(index_text: str, directory: str) -> Dict[str, str]:
    """Map local names to exported names for imports from ``./<directory>``.

    ``import { transferAction as sendToken } from './actions'`` yields
    ``{"sendToken": "transferAction"}``; default imports map to themselves.
    """
    pattern = re.compile(
        rf"import\s+(?:{{([^}}]+)}}|(\w+))\s+from\s+[\"']\./{re.escape(directory)}(?:/[^\"']+)?[\"']"
    )
    aliases: Dict[str, str] = {}
    for match in pattern.finditer(index_text):
        named, default = match.group(1), match.group(2)
        if named:
            for item in named.split(","):
                item = item.strip()
                if not item:
                    continue
                parts = [part.strip() for part in item.split(" as ")]
                alias = parts[-1]
                original = parts[0] or alias
                if alias and original:
                    aliases[alias] = original
        elif default:
            aliases[default] = default
    return aliases


def find_array_body(index_text: str, kind: str) -> Optional[str]:
    """Return the contents of the first ``<kind>: [...]``-style array literal."""
    for pattern in _ARRAY_PATTERNS[kind]:
        match = pattern.search(index_text)
        if match and match.group(1):
            return match.group(1)
    return None


def extract_references(array_body: str, aliases: Dict[str, str]) -> List[str]:
    """Return de-duplicated component names referenced in an array literal."""
    clean = strip_comments(array_body)
    names: List[str] = []
    seen: set[str] = set()
    for ref in _WORD.findall(clean):
        if ref in _KEYWORDS or ref in seen:
            continue
        name = aliases.get(ref, ref)
        seen.add(ref)
        if name in names:
            continue
        names.append(name)
    return names


def read_component_source(repo_path: Path, name: str, kind: str) -> Optional[str]:
    """Look for a component's defining file under ``src/<kind>/``."""
    base = repo_path / "src" / kind
    candidates = [
        base / f"{name}.ts",
        base / f"{name}.js",
        base / name / "index.ts",
        base / name / "index.js",
    ]
    stripped = re.sub(r"(Action|Service|Provider)$", "", name)
    if stripped and stripped != name:
        candidates.extend(
            [
                base / f"{stripped}.ts",
                base / f"{stripped}.js",
                base / stripped / "index.ts",
                base / stripped / "index.js",
            ]
        )
    for path in candidates:
        if path.is_file():
            try:
                return path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
    return None


def extract_component_details(component: ComponentInfo, source: str, kind: str) -> None:
    """Fill description, parameters, aliases or methods from ``source``."""
    name = component.name
    identifiers = {name, f"{name}Action", f"{name}Service", f"{name}Provider"}
    for match in _JSDOC.finditer(source):
        body, identifier = match.group(1), match.group(2)
        if identifier not in identifiers or not body:
            continue
        desc = _JSDOC_DESCRIPTION.search(body)
        if desc:
            text = (desc.group(1) or desc.group(2) or "").strip()
            if text:
                component.description = text

    if kind == ACTIONS:
        component.parameters = _interface_parameters(source, name) or _zod_parameters(source, name)
        alias_match = _ALIASES.search(source)
        if alias_match:
            component.aliases = [
                alias.strip().strip("'\"")
                for alias in alias_match.group(1).split(",")
                if alias.strip().strip("'\"")
            ]
    elif kind == SERVICES:
        component.methods = _service_methods(source)


def _interface_parameters(source: str, name: str) -> List[ParameterInfo]:
    pattern = re.compile(
        rf"interface\s+{re.escape(name)}(?:Action)?(?:Content|Input|Params)?\s*{{([^}}]+)}}",
        re.S,
    )
    match = pattern.search(source)
    if not match:
        return []
    params: List[ParameterInfo] = []
    for field_match in _INTERFACE_FIELD.finditer(match.group(1)):
        param_name, optional, param_type, comment = field_match.groups()
        if param_name and param_type and param_type.strip():
            params.append(
                ParameterInfo(
                    name=param_name,
                    type=param_type.strip(),
                    required=not optional,
                    description=(comment or "").strip(),
                )
            )
    return params


def _zod_parameters(source: str, name: str) -> List[ParameterInfo]:
    pattern = re.compile(
        rf"{re.escape(name)}(?:Action)?Schema\s*=\s*z\.object\(\{{([^}}]+)\}}",
        re.S,
    )
    match = pattern.search(source)
    if not match:
        return []
    params: List[ParameterInfo] = []
    for field_match in _ZOD_FIELD.finditer(match.group(1)):
        param_name, param_type, args, chain = field_match.groups()
        if param_name and param_type:
            params.append(
                ParameterInfo(
                    name=param_name,
                    type=param_type,
                    required=".optional(" not in (chain or ""),
                    description=(args or "").replace("'", "").replace('"', ""),
                )
            )
    return params


def _service_methods(source: str) -> List[MethodInfo]:
    methods: List[MethodInfo] = []
    seen: set[str] = set()
    for match in _METHOD.finditer(source):
        method_name, params = match.group(1), match.group(2)
        if (
            method_name == "constructor"
            or method_name.startswith("_")
            or method_name in _CONTROL_WORDS
            or method_name in seen
        ):
            continue
        seen.add(method_name)
        methods.append(MethodInfo(name=method_name, parameters=params.strip()))
    return methods


class ComponentExtractor:
    """Populates a PluginInfo's component lists from a checkout."""

    def extract(self, repo_path: Path, index_text: str, info: PluginInfo) -> None:
        if index_text:
            info.actions = self._from_index(repo_path, index_text, ACTIONS)
            info.services = self._from_index(repo_path, index_text, SERVICES)
            info.providers = self._from_index(repo_path, index_text, PROVIDERS)

            events = _EVENTS.search(index_text)
            if events:
                info.events = re.findall(r"\w+", events.group(1))
            evaluators = _EVALUATORS.search(index_text)
            if evaluators:
                info.evaluators = re.findall(r"\w+", evaluators.group(1))

        if not info.actions:
            info.actions = self._from_directory(repo_path, ACTIONS)
        if not info.services:
            info.services = self._from_directory(repo_path, SERVICES)
        if not info.providers:
            info.providers = self._from_directory(repo_path, PROVIDERS)

    def _from_index(self, repo_path: Path, index_text: str, kind: str) -> List[ComponentInfo]:
        aliases = parse_import_aliases(index_text, kind) if kind != SERVICES else {}
        for pattern in _ARRAY_PATTERNS[kind]:
            match = pattern.search(index_text)
            if not match or not match.group(1):
                continue
            body = match.group(1)
            if kind == SERVICES:
                names = _unique(_SERVICE_WORD.findall(strip_comments(body)))
            else:
                names = extract_references(body, aliases)
                if kind == ACTIONS:
                    inline = _INLINE_NAME.findall(strip_comments(body))
                    names.extend(name for name in _unique(inline) if name not in names)
            components = [self._build(repo_path, name, kind) for name in names]
            if components:
                logger.debug("Found %d %s in entry file", len(components), kind)
                return components
        return []

    def _from_directory(self, repo_path: Path, kind: str) -> List[ComponentInfo]:
        directory = repo_path / "src" / kind
        if not directory.is_dir():
            return []
        components: List[ComponentInfo] = []
        for path in sorted(directory.iterdir()):
            if not path.is_file() or path.suffix not in _SOURCE_SUFFIXES:
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.debug("Skipping unreadable %s: %s", path, exc)
                continue
            rel = f"src/{kind}/{path.name}"
            for name in _EXPORT_DECL.findall(content):
                components.append(ComponentInfo(name=name, source_code=content, file_path=rel))
            if kind == ACTIONS:
                default = _DEFAULT_EXPORT_NAME.search(content)
                if default:
                    components.append(
                        ComponentInfo(name=default.group(1), source_code=content, file_path=rel)
                    )
        return components

    @staticmethod
    def _build(repo_path: Path, name: str, kind: str) -> ComponentInfo:
        component = ComponentInfo(name=name)
        source = read_component_source(repo_path, name, kind)
        if source:
            component.source_code = source
            component.file_path = f"src/{kind}/{name}"
            extract_component_details(component, source, kind)
        return component


def read_index(repo_path: Path, candidates: Sequence[str] = INDEX_CANDIDATES) -> str:
    for candidate in candidates:
        path = repo_path / candidate
        if path.is_file():
            return path.read_text(encoding="utf-8")
    return ""


def _unique(values: Iterable[str]) -> List[str]:
    result: List[str] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result


__all__ = [
    "ComponentExtractor",
    "extract_component_details",
    "extract_references",
    "find_array_body",
    "parse_import_aliases",
    "read_component_source",
    "read_index",
    "strip_comments",
]
