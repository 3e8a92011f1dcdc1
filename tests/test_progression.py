"""Tests for the progression engine."""

import pytest

from gitgym.content import Level
from gitgym.errors import CurriculumNotFoundError


TEST_LEVELS = [None, "init", "add", "rm", "rm_cached", "diff"]


def two_hint_level():
    return Level(name="add", description="Add a file", hints=("this is hint 1", "this is hint 2"))


class TestSetLevel:

    def test_sets_level_and_resets_counters(self, engine):
        engine.profile.current_attempts = 5
        engine.profile.current_hint_index = 1

        engine.set_level("rm")

        assert engine.profile.level == "rm"
        assert engine.profile.current_attempts == 0
        assert engine.profile.current_hint_index == 0

    def test_saves_profile(self, engine, store):
        engine.set_level("rm")
        assert store.load().level == "rm"

    def test_accepts_unknown_level(self, engine):
        engine.set_level("not_in_curriculum")
        assert engine.profile.level == "not_in_curriculum"


class TestAdvance:

    def test_moves_to_next_level(self, engine):
        engine.profile.level = "init"

        assert engine.advance() == "add"
        assert engine.profile.completed_levels == ["init"]
        assert engine.profile.level == "add"

    def test_refreshes_current_levels(self, engine):
        engine.profile.level = "init"
        engine.advance()
        assert engine.profile.current_levels == TEST_LEVELS

    def test_resets_current_attempts(self, engine):
        engine.profile.level = "init"
        engine.profile.current_attempts = 1

        engine.advance()

        assert engine.profile.current_attempts == 0

    def test_picks_first_incomplete_level(self, engine):
        engine.profile.level = "rm_cached"
        engine.profile.completed_levels = ["init", "add"]

        engine.advance()

        assert engine.profile.level == "rm"
        assert engine.profile.completed_levels == ["init", "add", "rm_cached"]

    def test_from_not_started_selects_first_level(self, engine):
        assert engine.profile.level is None

        engine.advance()

        assert engine.profile.level == "init"
        assert engine.profile.completed_levels == []

    def test_all_done_stays_on_last_level(self, engine):
        engine.profile.level = "diff"
        engine.profile.completed_levels = ["init", "add", "rm", "rm_cached"]

        assert engine.advance() == "diff"
        assert engine.advance() == "diff"

        assert engine.profile.level == "diff"
        assert engine.profile.completed_levels == ["init", "add", "rm", "rm_cached", "diff"]
        assert engine.is_finished()

    def test_persists_progress(self, engine, store):
        engine.profile.level = "init"
        engine.advance()

        saved = store.load()
        assert saved.level == "add"
        assert saved.completed_levels == ["init"]

    def test_level_outside_curriculum_is_not_recorded(self, engine):
        engine.profile.level = "stray"
        engine.advance()
        assert engine.profile.completed_levels == []
        assert engine.profile.level == "init"


class TestSetCurriculum:

    def test_default_restores_builtin_levels(self, engine):
        engine.profile.folder = "/somewhere"
        engine.profile.completed_levels = ["level1"]

        engine.set_curriculum("default")

        assert engine.profile.folder is None
        assert engine.profile.current_levels == TEST_LEVELS
        assert engine.profile.completed_levels == []
        assert engine.profile.level == "init"

    def test_folder_loads_config(self, engine, curriculum_folder, store):
        engine.profile.level = "add"
        engine.profile.completed_levels = ["init"]

        engine.set_curriculum(str(curriculum_folder))

        assert engine.profile.folder == str(curriculum_folder)
        assert engine.profile.current_levels == [None, "level1", "level2", "level3"]
        assert engine.profile.completed_levels == []
        assert engine.profile.level is None
        assert store.load() == engine.profile

    def test_folder_then_advance_walks_custom_levels(self, engine, curriculum_folder):
        engine.set_curriculum(str(curriculum_folder))

        assert engine.advance() == "level1"
        assert engine.advance() == "level2"
        assert engine.profile.completed_levels == ["level1"]

    def test_missing_config_leaves_profile_untouched(self, engine, tmp_path):
        engine.profile.level = "add"
        engine.profile.completed_levels = ["init"]

        with pytest.raises(CurriculumNotFoundError):
            engine.set_curriculum(str(tmp_path / "nowhere"))

        assert engine.profile.folder is None
        assert engine.profile.level == "add"
        assert engine.profile.completed_levels == ["init"]


class TestHints:

    def test_cycles_through_multiple_hints(self, engine):
        level = two_hint_level()

        assert engine.next_hint(level) == "this is hint 1"
        assert engine.next_hint(level) == "this is hint 2"
        assert engine.next_hint(level) == "this is hint 1"

    def test_hint_index_is_saved(self, engine, store):
        engine.next_hint(two_hint_level())
        assert store.load().current_hint_index == 1

    def test_single_hint_does_not_move_index(self, engine):
        level = Level(name="init", description="Init", hints=("this is a hint",))

        assert engine.next_hint(level) == "this is a hint"
        assert engine.next_hint(level) == "this is a hint"
        assert engine.profile.current_hint_index == 0

    def test_no_hints_returns_none(self, engine):
        level = Level(name="init", description="Init")

        assert engine.next_hint(level) is None
        assert engine.profile.current_hint_index == 0

    def test_set_level_restarts_hints(self, engine):
        level = two_hint_level()
        engine.next_hint(level)

        engine.set_level("add")

        assert engine.next_hint(level) == "this is hint 1"


class TestAttemptsAndStatus:

    def test_record_attempt_counts(self, engine, store):
        assert engine.record_attempt() == 1
        assert engine.record_attempt() == 2
        assert store.load().current_attempts == 2

    def test_not_finished_without_levels(self, engine):
        assert not engine.is_finished()

    def test_status(self, engine):
        engine.profile.level = "init"
        engine.advance()
        engine.record_attempt()

        assert engine.status() == {
            "level": "add",
            "folder": None,
            "completed": 1,
            "total": 5,
            "attempts": 1,
            "finished": False,
        }
