"""Exception hierarchy shared by the automation jobs."""

from __future__ import annotations


class AutomationError(RuntimeError):
    """Base class for errors raised by plugins-automation."""


class SetupError(AutomationError):
    """Raised when a job precondition fails before any repository is touched."""


class ConfigError(SetupError):
    """Raised when the configuration file cannot be parsed."""


class VersionError(AutomationError, ValueError):
    """Raised when a manifest version cannot be bumped."""


class UnsafeWriteError(AutomationError):
    """Raised when a write would land on the automation repository itself."""


class GitHubAPIError(AutomationError):
    """Raised when the GitHub REST API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NpmRegistryError(AutomationError):
    """Raised when the npm registry or downloads API cannot be read."""


__all__ = [
    "AutomationError",
    "ConfigError",
    "GitHubAPIError",
    "NpmRegistryError",
    "SetupError",
    "UnsafeWriteError",
    "VersionError",
]
