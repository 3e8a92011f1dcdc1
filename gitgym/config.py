"""Configuration management for gitgym."""

import logging
import os
import shutil
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# --- Logging Setup ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.WARNING),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("gitgym")

# Base paths
BASE_DIR = Path(__file__).parent

# Built-in level definitions ship with the package
LEVELS_DIR = Path(os.getenv("GITGYM_LEVELS_DIR", BASE_DIR / "levels"))

# Progress file, relative to the working directory
PROFILE_FILE = os.getenv("GITGYM_PROFILE_FILE", ".profile.yml")

# Directory the game is played in
WORKDIR_NAME = os.getenv("GITGYM_WORKDIR", "git_gym")

# Value of `gitgym curriculum` that switches back to the built-in levels
DEFAULT_CURRICULUM = "default"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def get_int_setting(key: str, default: int) -> int:
    """Read an integer setting from the environment."""
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a whole number, got {value!r}") from None


# Play settings
HINT_AFTER_ATTEMPTS = get_int_setting("HINT_AFTER_ATTEMPTS", 3)  # Failed checks before suggesting a hint
SETUP_TIMEOUT = get_int_setting("SETUP_TIMEOUT", 30)  # seconds per setup/solution command


def validate_config(require_git: bool = False) -> list[str]:
    """Validate configuration and return list of issues.

    Args:
        require_git: If True, treat a missing git executable as an error rather than a warning.

    Returns:
        List of warning strings for non-critical issues.

    Raises:
        ConfigurationError: If require_git is True and git is not on PATH.
    """
    issues = []

    if shutil.which("git") is None:
        msg = "git executable not found on PATH"
        if require_git:
            raise ConfigurationError(f"{msg}. Install git to play the levels.")
        issues.append(msg)

    if not LEVELS_DIR.is_dir():
        issues.append(f"Levels folder does not exist: {LEVELS_DIR}")

    if HINT_AFTER_ATTEMPTS < 1:
        issues.append(f"HINT_AFTER_ATTEMPTS should be at least 1, got {HINT_AFTER_ATTEMPTS}")

    return issues
