"""README generation for plugin repositories."""

from .generator import ReadmeGenerator

__all__ = ["ReadmeGenerator"]
