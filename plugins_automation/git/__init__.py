"""Git CLI wrappers."""

from .publisher import Publisher

__all__ = ["Publisher"]
