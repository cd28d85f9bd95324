"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass
class ValidationIssue:
    """A single finding about generated output."""

    code: str
    detail: str
    sections: List[str] = field(default_factory=list)


class ValidationError(RuntimeError):
    """Raised when generated output is unusable."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue] = ()) -> None:
        super().__init__(message)
        self.issues = list(issues)


@dataclass
class ValidationReport:
    """Advisory findings that do not block the generated output."""

    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings

    def codes(self) -> List[str]:
        return [issue.code for issue in self.warnings]
