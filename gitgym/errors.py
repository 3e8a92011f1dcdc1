"""Exceptions raised by gitgym."""


class GitGymError(Exception):
    """Base class for all gitgym errors."""
    pass


class StorageError(GitGymError):
    """Raised when the profile file cannot be read or written."""
    pass


class CurriculumNotFoundError(GitGymError):
    """Raised when a curriculum folder or its config file is missing."""

    def __init__(self, folder, reason: str = ""):
        self.folder = folder
        message = f"No curriculum config found in {folder}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NoSuchSettingError(GitGymError, KeyError):
    """Raised when reading or writing a profile setting that does not exist."""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"No such setting: {self.key!r}"


class LevelNotFoundError(GitGymError):
    """Raised when a level is required but has no definition."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Level does not exist: {name}")


class LevelDefinitionError(GitGymError):
    """Raised when a level definition file is malformed."""
    pass


class LevelSetupError(GitGymError):
    """Raised when a level's setup command fails."""
    pass
