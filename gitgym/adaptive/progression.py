"""Level progression: current level, completion and hint paging."""

import logging
from typing import Optional

from ..config import DEFAULT_CURRICULUM
from ..content.curriculum import CurriculumSource
from ..profile import Profile, ProfileStore

logger = logging.getLogger("gitgym.adaptive")


class ProgressionEngine:
    """Move a profile through its curriculum, saving after every change."""

    def __init__(self, profile: Profile, store: ProfileStore, curriculum: CurriculumSource):
        self.profile = profile
        self.store = store
        self.curriculum = curriculum

    def save(self):
        self.store.save(self.profile)

    def set_level(self, name: Optional[str]):
        """Select a level and reset the counters for it."""
        self.profile.level = name
        self.profile.current_attempts = 0
        self.profile.current_hint_index = 0
        self.save()
        logger.info("Level set to %s", name)

    def next_level(self) -> Optional[str]:
        """
        First level of the curriculum that is not completed yet.

        Strict curriculum order; the sentinel is never a candidate. When
        everything is done, the last level of the curriculum is returned.
        """
        levels = self.profile.current_levels
        completed = set(self.profile.completed_levels)
        for name in levels:
            if name is not None and name not in completed:
                return name
        return levels[-1] if levels else None

    def advance(self) -> Optional[str]:
        """
        Complete the current level and move to the next one.

        - Refresh current_levels from the curriculum source
        - Record the current level as completed (once, real levels only)
        - Select the first incomplete level, or the last one if all are done
        """
        self.profile.current_levels = self.curriculum.resolve(self.profile)

        level = self.profile.level
        if (
            level is not None
            and level in self.profile.current_levels
            and level not in self.profile.completed_levels
        ):
            self.profile.completed_levels.append(level)

        next_name = self.next_level()
        self.set_level(next_name)
        return next_name

    def set_curriculum(self, path: Optional[str]):
        """
        Switch to another curriculum and start over.

        `DEFAULT_CURRICULUM` (or None) restores the built-in levels and selects
        the first of them. Any other value is a folder holding a `config`
        file; no level is selected until the player starts.
        """
        if path is None or path == DEFAULT_CURRICULUM:
            self.profile.folder = None
            self.profile.current_levels = self.curriculum.default()
            self.profile.completed_levels = []
            self.set_level(self.curriculum.first_level())
            return

        # Read first so a missing config leaves the profile untouched
        names = self.curriculum.read_config(path)
        self.profile.folder = str(path)
        self.profile.current_levels = [None] + names
        self.profile.completed_levels = []
        self.set_level(None)

    def next_hint(self, level) -> Optional[str]:
        """
        Return the next hint for a level.

        Multiple hints are paged through in order and wrap around. A single
        hint is always returned as is. Levels without hints return None.
        """
        hints = tuple(level.hints or ())
        if not hints:
            return None
        if len(hints) == 1:
            return hints[0]

        index = self.profile.current_hint_index % len(hints)
        self.profile.current_hint_index = (index + 1) % len(hints)
        self.save()
        return hints[index]

    def record_attempt(self) -> int:
        """Count one more check of the current level."""
        self.profile.current_attempts += 1
        self.save()
        return self.profile.current_attempts

    def is_finished(self) -> bool:
        """True when every level of the curriculum is completed."""
        real_levels = [name for name in self.profile.current_levels if name is not None]
        if not real_levels:
            return False
        completed = set(self.profile.completed_levels)
        return all(name in completed for name in real_levels)

    def status(self) -> dict:
        """Summary of where the player stands."""
        real_levels = [name for name in self.profile.current_levels if name is not None]
        return {
            "level": self.profile.level,
            "folder": self.profile.folder,
            "completed": len(self.profile.completed_levels),
            "total": len(real_levels),
            "attempts": self.profile.current_attempts,
            "finished": self.is_finished(),
        }
