"""Level progression and hint paging."""

from .progression import ProgressionEngine

__all__ = [
    "ProgressionEngine",
]
