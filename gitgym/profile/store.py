"""Profile persistence.

The profile is one YAML mapping in the working directory holding everything
gitgym remembers between invocations: the curriculum in use, the current
level, counters for the current level and the completed levels.
"""

import logging
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Optional, Union

import yaml

from ..config import PROFILE_FILE
from ..errors import NoSuchSettingError, StorageError

logger = logging.getLogger("gitgym.profile")


@dataclass
class Profile:
    """Progress state for one working directory."""
    folder: Optional[str] = None
    level: Optional[str] = None
    current_attempts: int = 0
    current_hint_index: int = 0
    current_levels: list = field(default_factory=list)
    completed_levels: list = field(default_factory=list)

    def __setattr__(self, name, value):
        # A new curriculum source invalidates the cached level list.
        if name == "folder" and getattr(self, "folder", value) != value:
            object.__setattr__(self, "current_levels", [])
        object.__setattr__(self, name, value)

    def __getitem__(self, key: str):
        return self.get(key)

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def get(self, key: str):
        """Read a setting by name."""
        if key not in SETTINGS:
            raise NoSuchSettingError(key)
        return getattr(self, key)

    def set(self, key: str, value):
        """Write a setting by name."""
        if key not in SETTINGS:
            raise NoSuchSettingError(key)
        setattr(self, key, value)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        defaults = cls()
        return cls(
            folder=data.get("folder", defaults.folder),
            level=data.get("level", defaults.level),
            current_attempts=_as_count(data.get("current_attempts"), "current_attempts"),
            current_hint_index=_as_count(data.get("current_hint_index"), "current_hint_index"),
            current_levels=list(data.get("current_levels") or []),
            completed_levels=list(data.get("completed_levels") or []),
        )


SETTINGS = tuple(f.name for f in fields(Profile))


def _as_count(value, key: str) -> int:
    """Counters are non-negative integers; a missing or null value means 0."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise StorageError(f"Profile setting {key} must be a non-negative integer, got {value!r}")
    return value


class ProfileStore:
    """
    Loads and saves the profile file.

    Every save rewrites the whole file; there is no locking, the last
    writer wins.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        """
        Initialize the store.

        Args:
            path: Location of the profile file (defaults to PROFILE_FILE)
        """
        self.path = Path(path if path is not None else PROFILE_FILE)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Profile:
        """Load the profile, falling back to defaults for missing keys."""
        if not self.path.exists():
            logger.debug("No profile at %s, using defaults", self.path)
            return Profile()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise StorageError(f"Cannot read profile {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise StorageError(f"Profile {self.path} is not valid YAML: {e}") from e

        if data is None:
            return Profile()
        if not isinstance(data, dict):
            raise StorageError(f"Profile {self.path} does not contain a mapping")

        unknown = [key for key in data if key not in SETTINGS]
        if unknown:
            logger.warning("Ignoring unknown profile settings: %s", ", ".join(map(str, unknown)))

        return Profile.from_dict(data)

    def save(self, profile: Profile):
        """Write the full profile, replacing whatever was there."""
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(profile.to_dict(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise StorageError(f"Cannot write profile {self.path}: {e}") from e
        logger.debug("Saved profile to %s (level=%s)", self.path, profile.level)
