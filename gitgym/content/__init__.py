"""Curriculum order and level definitions."""

from .curriculum import LEVELS, CurriculumSource
from .level_loader import Level, LevelLoader, LevelRunner, load_level_from_yaml

__all__ = [
    "LEVELS",
    "CurriculumSource",
    "Level",
    "LevelLoader",
    "LevelRunner",
    "load_level_from_yaml",
]
