"""Core data models shared across automation jobs."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RepositoryRef:
    """A plugin repository selected for processing."""

    name: str
    clone_url: str


@dataclass
class ParameterInfo:
    """A single input parameter recovered from an action's source."""

    name: str
    type: str
    required: bool
    description: str = ""


@dataclass
class MethodInfo:
    """A public method signature recovered from a service's source."""

    name: str
    parameters: str
    description: str = ""


@dataclass
class ComponentInfo:
    """Action, service or provider registered by a plugin.

    Every field beyond ``name`` is best-effort output of regular-expression
    matching and may be missing or wrong.
    """

    name: str
    source_code: Optional[str] = None
    file_path: Optional[str] = None
    description: Optional[str] = None
    parameters: List[ParameterInfo] = field(default_factory=list)
    methods: List[MethodInfo] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    return_type: Optional[str] = None
    usage_example: Optional[str] = None
    configuration: Optional[str] = None


@dataclass
class PluginInfo:
    """Structural facts about a plugin used to synthesise its README."""

    name: str
    description: str
    package_name: str
    repository: str = ""
    actions: List[ComponentInfo] = field(default_factory=list)
    services: List[ComponentInfo] = field(default_factory=list)
    providers: List[ComponentInfo] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    evaluators: List[str] = field(default_factory=list)
    env_vars: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    has_tests: bool = False


@dataclass
class PackageInfo:
    """Registry metadata for a published npm package."""

    name: str
    versions: List[str] = field(default_factory=list)
    description: Optional[str] = None
    repository: Optional[str] = None
    maintainers: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    license: Optional[str] = None
    created_date: Optional[str] = None
    modified_date: Optional[str] = None

    @property
    def latest_version(self) -> str:
        return self.versions[-1] if self.versions else ""


@dataclass
class PackageDownloads:
    """Download counts for one package over the standard periods."""

    package_name: str
    weekly: int = 0
    monthly: int = 0
    yearly: int = 0
    period: str = "last-year"

    @property
    def total(self) -> int:
        return self.yearly


@dataclass
class VersionDownloads:
    """Estimated downloads attributed to a single package version."""

    package_name: str
    version: str
    downloads: int
    period: str = "last-month"
