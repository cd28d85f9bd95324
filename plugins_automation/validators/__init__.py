"""Validation package for generated documents."""

from .base import ValidationError, ValidationIssue, ValidationReport
from .readme import ReadmeValidator

__all__ = [
    "ReadmeValidator",
    "ValidationError",
    "ValidationIssue",
    "ValidationReport",
]
