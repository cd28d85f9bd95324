"""Chat-completion client used by the document synthesis jobs."""

from .runner import LLMRequest, LLMRunner

__all__ = ["LLMRequest", "LLMRunner"]
