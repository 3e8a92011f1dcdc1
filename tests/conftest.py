"""Shared fixtures: an isolated working directory and a small curriculum."""

import pytest

from gitgym.adaptive import ProgressionEngine
from gitgym.content import CurriculumSource
from gitgym.profile import ProfileStore


TEST_LEVELS = [None, "init", "add", "rm", "rm_cached", "diff"]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty git_gym directory."""
    path = tmp_path / "git_gym"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def store(tmp_path):
    return ProfileStore(tmp_path / ".profile.yml")


@pytest.fixture
def curriculum(tmp_path):
    return CurriculumSource(default_levels=TEST_LEVELS, levels_dir=tmp_path / "levels")


@pytest.fixture
def engine(store, curriculum):
    return ProgressionEngine(store.load(), store, curriculum)


@pytest.fixture
def curriculum_folder(tmp_path):
    """A custom curriculum with three levels that need no git."""
    folder = tmp_path / "custom"
    folder.mkdir()
    (folder / "config").write_text("level1\nlevel2  \nlevel3\n")
    (folder / "level1.yml").write_text(
        "description: Create done.txt\n"
        "difficulty: 2\n"
        "hints:\n"
        "  - hint one\n"
        "  - hint two\n"
        "setup:\n"
        "  - rm -f done.txt\n"
        "  - touch start.txt\n"
        "solution:\n"
        "  - test -f done.txt\n"
    )
    (folder / "level2.yml").write_text(
        "description: Create second.txt\n"
        "hint: just touch it\n"
        "solution:\n"
        "  - test -f second.txt\n"
    )
    (folder / "level3.yml").write_text(
        "description: Always passes\n"
        "solution: 'true'\n"
    )
    return folder
