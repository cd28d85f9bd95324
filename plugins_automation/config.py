"""Configuration loading for plugins-automation (.env and .plugins-automation.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

CONFIG_FILENAME = ".plugins-automation.yml"

DEFAULT_ORG = "elizaos-plugins"
DEFAULT_MAIN_BRANCH = "main"
DEFAULT_REPO_PREFIX = "plugin-"
DEFAULT_STATS_FILE = "elizaos-npm-download-stats.xlsx"
DEFAULT_STATS_SCOPES = ("@elizaos", "@elizaos-plugins")


@dataclass
class RunOptions:
    """Mode flags for a single invocation, passed explicitly to every job."""

    test_mode: bool = False
    local_mode: bool = False
    repo: Optional[str] = None
    no_ai: bool = False


@dataclass
class LLMConfig:
    """Hosted chat-completion settings."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    request_timeout: Optional[float] = None


@dataclass
class StatsConfig:
    """Download statistics report settings."""

    output_dir: Path
    output_file: str = DEFAULT_STATS_FILE
    scopes: List[str] = field(default_factory=lambda: list(DEFAULT_STATS_SCOPES))

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file


@dataclass
class AutomationConfig:
    """Effective settings for a job run."""

    root: Path
    org: str = DEFAULT_ORG
    main_branch: str = DEFAULT_MAIN_BRANCH
    repo_prefix: str = DEFAULT_REPO_PREFIX
    temp_dir: Optional[Path] = None
    local_root: Optional[Path] = None
    template_path: Optional[Path] = None
    request_delay: float = 0.2
    download_delay: float = 0.1
    github_token: Optional[str] = None
    llm: LLMConfig = field(default_factory=LLMConfig)
    stats: Optional[StatsConfig] = None

    def __post_init__(self) -> None:
        if self.temp_dir is None:
            self.temp_dir = self.root / "temp"
        if self.local_root is None:
            self.local_root = self.root.parent
        if self.stats is None:
            self.stats = StatsConfig(output_dir=self.root / "assets")


def load_config(
    root: Path | str,
    *,
    environ: Mapping[str, str] | None = None,
) -> AutomationConfig:
    """Build the configuration from the environment and an optional YAML file.

    When ``environ`` is omitted, ``<root>/.env`` is loaded into the process
    environment first and ``os.environ`` is consulted.
    """
    root_path = Path(root).expanduser().resolve()
    if environ is None:
        load_dotenv(root_path / ".env", override=False)
        environ = os.environ

    data = _read_config(root_path / CONFIG_FILENAME)

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig(
        model=_as_str(llm_data.get("model")) or environ.get("OPENAI_MODEL") or None,
        base_url=_as_str(llm_data.get("base_url")) or environ.get("OPENAI_BASE_URL") or None,
        api_key=environ.get("OPENAI_API_KEY") or None,
        temperature=_as_float(llm_data.get("temperature")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
    )

    stats_data = _as_dict(data.get("stats"))
    output_dir = _as_path(root_path, stats_data.get("output_dir")) or root_path / "assets"
    stats = StatsConfig(
        output_dir=output_dir,
        output_file=_as_str(stats_data.get("output_file")) or DEFAULT_STATS_FILE,
        scopes=_as_str_list(stats_data.get("scopes")) or list(DEFAULT_STATS_SCOPES),
    )

    request_delay = _as_float(data.get("request_delay"))
    download_delay = _as_float(data.get("download_delay"))

    return AutomationConfig(
        root=root_path,
        org=_as_str(data.get("org")) or DEFAULT_ORG,
        main_branch=_as_str(data.get("main_branch")) or DEFAULT_MAIN_BRANCH,
        repo_prefix=_as_str(data.get("repo_prefix")) or DEFAULT_REPO_PREFIX,
        temp_dir=_as_path(root_path, data.get("temp_dir")),
        local_root=_as_path(root_path, data.get("local_root")),
        template_path=_as_path(root_path, data.get("template_path")),
        request_delay=request_delay if request_delay is not None else 0.2,
        download_delay=download_delay if download_delay is not None else 0.1,
        github_token=environ.get("GITHUB_TOKEN") or None,
        llm=llm,
        stats=stats,
    )


def _read_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "AutomationConfig",
    "LLMConfig",
    "RunOptions",
    "StatsConfig",
    "load_config",
]
