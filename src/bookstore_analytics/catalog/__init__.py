"""Master data owned by the surrounding application (books, shops, people)."""

from .registry import Catalog

__all__ = ["Catalog"]
