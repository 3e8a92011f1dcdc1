"""Curriculum order: which levels exist and in what sequence they are played."""

import logging
from pathlib import Path
from typing import Optional

from ..config import LEVELS_DIR
from ..errors import CurriculumNotFoundError

logger = logging.getLogger("gitgym.content")

# Built-in curriculum. Index 0 is the "not started yet" sentinel.
LEVELS = [
    None,
    "init",
    "config",
    "add",
    "commit",
    "ignore",
    "rm",
    "rm_cached",
    "rename",
    "branch",
]

CONFIG_FILENAME = "config"


class CurriculumSource:
    """Resolve the ordered list of level names for a profile."""

    def __init__(self, default_levels: Optional[list] = None, levels_dir: Optional[Path] = None):
        self.default_levels = list(default_levels if default_levels is not None else LEVELS)
        self.levels_dir = Path(levels_dir if levels_dir is not None else LEVELS_DIR)

    def default(self) -> list:
        """Built-in curriculum, sentinel included."""
        return list(self.default_levels)

    def read_config(self, folder) -> list[str]:
        """Read the level names listed in <folder>/config, one per line."""
        config_path = Path(folder) / CONFIG_FILENAME
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except FileNotFoundError as e:
            raise CurriculumNotFoundError(folder) from e
        except OSError as e:
            raise CurriculumNotFoundError(folder, e.strerror or str(e)) from e

        names = [line.rstrip() for line in lines]
        names = [name for name in names if name]
        if not names:
            raise CurriculumNotFoundError(folder, "no levels listed")
        return names

    def resolve(self, profile) -> list:
        """Ordered level names for the profile's curriculum, sentinel first."""
        if profile.folder:
            names = self.read_config(profile.folder)
            logger.debug("Loaded %d levels from %s", len(names), profile.folder)
            return [None] + names
        return self.default()

    def first_level(self) -> Optional[str]:
        """First real level of the built-in curriculum."""
        for name in self.default_levels:
            if name is not None:
                return name
        return None

    def level_dir(self, profile) -> Path:
        """Directory holding the level definitions for the profile's curriculum."""
        if profile.folder:
            return Path(profile.folder)
        return self.levels_dir

    def list(self):
        """Built-in curriculum without the sentinel, for display."""
        return [name for name in self.default_levels if name is not None]
