"""Heuristic checks for model-generated README documents."""

from __future__ import annotations

from typing import List, Sequence

from ..logging import get_logger
from ..prompting.constants import PRESERVED_SECTIONS
from .base import ValidationError, ValidationIssue, ValidationReport

MIN_README_CHARS = 500
MIN_LENGTH_RATIO = 0.8


class ReadmeValidator:
    """Rejects near-empty output and warns when existing content looks lost.

    Only the length floor is enforced; the length ratio and preserved-section
    checks are logged for a human reviewer.
    """

    name = "readme"

    def __init__(
        self,
        *,
        min_chars: int = MIN_README_CHARS,
        min_ratio: float = MIN_LENGTH_RATIO,
        preserved_sections: Sequence[str] = PRESERVED_SECTIONS,
    ) -> None:
        self.min_chars = min_chars
        self.min_ratio = min_ratio
        self.preserved_sections = tuple(preserved_sections)
        self.logger = get_logger("validators.readme")

    def validate(self, generated: str, existing: str | None = None) -> ValidationReport:
        new_text = (generated or "").strip()
        if len(new_text) < self.min_chars:
            raise ValidationError(
                "Model returned insufficient content",
                [
                    ValidationIssue(
                        code="too_short",
                        detail=f"{len(new_text)} chars, minimum is {self.min_chars}",
                    )
                ],
            )

        report = ValidationReport()
        old_text = (existing or "").strip()
        if not old_text:
            return report

        if len(new_text) < len(old_text) * self.min_ratio:
            issue = ValidationIssue(
                code="shorter_than_existing",
                detail=(
                    f"New README ({len(new_text)} chars) is significantly shorter than "
                    f"existing ({len(old_text)} chars)"
                ),
            )
            report.warnings.append(issue)
            self.logger.warning("%s; this might indicate lost content", issue.detail)

        missing = self.missing_sections(new_text, old_text)
        if missing:
            issue = ValidationIssue(
                code="sections_removed",
                detail="Sections present in the existing README were removed",
                sections=missing,
            )
            report.warnings.append(issue)
            self.logger.warning(
                "The following sections were removed from the README: %s. Consider regenerating.",
                ", ".join(missing),
            )
        return report

    def missing_sections(self, generated: str, existing: str) -> List[str]:
        return [
            section
            for section in self.preserved_sections
            if f"## {section}" in existing and f"## {section}" not in generated
        ]


__all__ = ["MIN_LENGTH_RATIO", "MIN_README_CHARS", "ReadmeValidator"]
