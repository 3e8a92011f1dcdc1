"""Load level definitions from YAML files and run them against a working directory."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from ..config import SETUP_TIMEOUT
from ..errors import LevelDefinitionError, LevelNotFoundError, LevelSetupError
from .curriculum import CurriculumSource

logger = logging.getLogger("gitgym.content")

LEVEL_SUFFIXES = (".yml", ".yaml")

# Fixture folders ship their repository as .gitgym; setup renames it to .git
FIXTURE_GIT_DIR = ".gitgym"


@dataclass(frozen=True)
class Level:
    """One exercise: what to do, how to prepare for it and how to check it."""
    name: str
    description: str
    difficulty: int = 1
    hints: tuple = ()
    setup: tuple = ()
    solution: tuple = ()
    path: Optional[Path] = None
    fixture_dir: Optional[Path] = None

    @property
    def hint(self) -> Optional[str]:
        """The hint of a single-hint level."""
        if len(self.hints) == 1:
            return self.hints[0]
        return None


def _as_commands(value, key: str, yaml_path: Path) -> tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise LevelDefinitionError(f"{yaml_path}: '{key}' must be a command or a list of commands")


def load_level_from_yaml(yaml_path: Path) -> Optional[Level]:
    """
    Load a level from a YAML file.

    Expected YAML structure:
    ```yaml
    description: Stage the README file.
    difficulty: 1
    hints:
      - Look at `git help add`.
      - "`git add <file>` stages a file."
    setup:
      - git init -q
      - touch README
    solution:
      - git diff --cached --name-only | grep -qx README
    ```

    A single `hint:` string may be given instead of `hints:`.
    Returns None if the file does not exist.
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        return None

    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LevelDefinitionError(f"{yaml_path}: invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise LevelDefinitionError(f"{yaml_path}: expected a mapping")
    if not data.get("description"):
        raise LevelDefinitionError(f"{yaml_path}: missing 'description'")

    if "hints" in data:
        hints = data["hints"] or []
        if not isinstance(hints, list):
            raise LevelDefinitionError(f"{yaml_path}: 'hints' must be a list")
        hints = tuple(str(h) for h in hints)
    elif data.get("hint"):
        hints = (str(data["hint"]),)
    else:
        hints = ()

    try:
        difficulty = int(data.get("difficulty", 1))
    except (TypeError, ValueError) as e:
        raise LevelDefinitionError(f"{yaml_path}: 'difficulty' must be a number") from e

    name = yaml_path.stem
    fixture_dir = yaml_path.parent / name

    return Level(
        name=name,
        description=str(data["description"]).strip(),
        difficulty=difficulty,
        hints=hints,
        setup=_as_commands(data.get("setup"), "setup", yaml_path),
        solution=_as_commands(data.get("solution"), "solution", yaml_path),
        path=yaml_path,
        fixture_dir=fixture_dir if fixture_dir.is_dir() else None,
    )


class LevelLoader:
    """Find level definitions for the profile's curriculum."""

    def __init__(self, curriculum: Optional[CurriculumSource] = None):
        self.curriculum = curriculum or CurriculumSource()

    def find(self, profile, name) -> Optional[Path]:
        """Path of the definition file for a level, or None."""
        if not name:
            return None
        level_dir = self.curriculum.level_dir(profile)
        for suffix in LEVEL_SUFFIXES:
            candidate = level_dir / f"{name}{suffix}"
            if candidate.exists():
                return candidate
        return None

    def exists(self, profile, name) -> bool:
        return self.find(profile, name) is not None

    def load(self, profile, name) -> Optional[Level]:
        """Load a level by name. Returns None if it does not exist."""
        path = self.find(profile, name)
        if path is None:
            logger.info("Level %r not found in %s", name, self.curriculum.level_dir(profile))
            return None
        return load_level_from_yaml(path)

    def require(self, profile, name) -> Level:
        """Load a level that must exist, such as the profile's current level."""
        level = self.load(profile, name)
        if level is None:
            raise LevelNotFoundError(name)
        return level


class LevelRunner:
    """Run a level's setup and solution commands in a working directory."""

    def __init__(self, workdir: Union[str, Path, None] = None, timeout: int = SETUP_TIMEOUT):
        self.workdir = Path(workdir) if workdir is not None else Path.cwd()
        self.timeout = timeout

    def _run(self, command: str) -> subprocess.CompletedProcess:
        logger.debug("Running %r in %s", command, self.workdir)
        return subprocess.run(
            command,
            shell=True,
            cwd=self.workdir,
            capture_output=True,
            text=True,
            timeout=self.timeout,
        )

    def copy_fixture(self, level: Level):
        """Copy the level's fixture folder into the working directory."""
        if level.fixture_dir is None:
            return
        shutil.copytree(level.fixture_dir, self.workdir, dirs_exist_ok=True)

        fixture_git = self.workdir / FIXTURE_GIT_DIR
        if fixture_git.is_dir():
            target = self.workdir / ".git"
            if target.exists():
                shutil.rmtree(target)
            fixture_git.rename(target)

    def setup(self, level: Level):
        """Prepare the working directory for a level."""
        self.copy_fixture(level)
        for command in level.setup:
            try:
                result = self._run(command)
            except subprocess.TimeoutExpired as e:
                raise LevelSetupError(f"Setup of level {level.name} timed out: {command}") from e
            if result.returncode != 0:
                raise LevelSetupError(
                    f"Setup of level {level.name} failed: {command}\n{result.stderr.strip()}"
                )

    def solve(self, level: Level) -> bool:
        """Check whether the working directory satisfies the level."""
        if not level.solution:
            return False
        for command in level.solution:
            try:
                result = self._run(command)
            except subprocess.TimeoutExpired:
                logger.warning("Solution check timed out for level %s: %s", level.name, command)
                return False
            if result.returncode != 0:
                logger.debug("Check failed for level %s: %s", level.name, command)
                return False
        return True
