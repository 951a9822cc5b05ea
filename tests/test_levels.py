"""Tests for the level table and XP-to-level lookup."""

import pytest

from language_coach.errors import InvalidInput
from language_coach.models.progress import LevelThreshold
from language_coach.progression.levels import (
    LEVEL_THRESHOLDS,
    MAX_LEVEL,
    find_threshold,
    level_from_xp,
    load_level_thresholds,
    validate_thresholds,
)


class TestLevelFromXP:
    def test_zero_xp_is_first_tier(self):
        info = level_from_xp(0)
        assert info.level == "A1"
        assert info.name == "Beginner"
        assert info.progress_to_next == 0
        assert info.next_level == "A1+"

    def test_mid_tier_progress(self):
        info = level_from_xp(950)
        assert info.level == "A2"
        assert info.min_xp == 500
        assert info.next_level == "B1"
        assert info.progress_to_next == 90

    def test_exact_threshold_belongs_to_that_tier(self):
        for threshold in LEVEL_THRESHOLDS:
            info = level_from_xp(threshold.min_xp)
            assert info.level == threshold.level
            assert info.progress_to_next == (100 if threshold.level == "C2" else 0)

    def test_one_below_threshold_is_previous_tier(self):
        assert level_from_xp(999).level == "A2"
        assert level_from_xp(1000).level == "B1"

    def test_top_tier_is_max(self):
        info = level_from_xp(5500)
        assert info.level == "C2"
        assert info.next_level == MAX_LEVEL
        assert info.progress_to_next == 100
        assert level_from_xp(1_000_000).progress_to_next == 100

    def test_progress_rounds_half_up(self):
        # 1 of 200 XP is 0.5%
        assert level_from_xp(1).progress_to_next == 1
        # 3 of 200 XP is 1.5%
        assert level_from_xp(3).progress_to_next == 2

    def test_progress_always_in_range(self):
        for xp in range(0, 6000, 37):
            assert 0 <= level_from_xp(xp).progress_to_next <= 100

    def test_monotonic(self):
        order = [t.level for t in LEVEL_THRESHOLDS]
        previous = 0
        for xp in range(0, 7000, 25):
            rank = order.index(level_from_xp(xp).level)
            assert rank >= previous
            previous = rank


class TestNonStandardTables:
    def test_single_entry_table(self):
        table = [LevelThreshold(level="X", name="Only", min_xp=0)]
        info = level_from_xp(42, table)
        assert info.level == "X"
        assert info.next_level == MAX_LEVEL
        assert info.progress_to_next == 100

    def test_xp_below_first_tier_clamps(self):
        table = [
            LevelThreshold(level="X", name="First", min_xp=10),
            LevelThreshold(level="Y", name="Second", min_xp=20),
        ]
        info = level_from_xp(5, table)
        assert info.level == "X"
        assert info.progress_to_next == 0


class TestValidateThresholds:
    def test_reference_table_is_valid(self):
        assert validate_thresholds(LEVEL_THRESHOLDS) == LEVEL_THRESHOLDS

    def test_empty_table(self):
        with pytest.raises(InvalidInput):
            validate_thresholds([])

    def test_first_entry_must_start_at_zero(self):
        with pytest.raises(InvalidInput):
            validate_thresholds([LevelThreshold(level="A", name="a", min_xp=5)])

    def test_must_strictly_increase(self):
        table = [
            LevelThreshold(level="A", name="a", min_xp=0),
            LevelThreshold(level="B", name="b", min_xp=100),
            LevelThreshold(level="C", name="c", min_xp=100),
        ]
        with pytest.raises(InvalidInput):
            validate_thresholds(table)


class TestLoadLevelThresholds:
    def test_missing_file_falls_back(self, tmp_path):
        assert load_level_thresholds(tmp_path / "nope.yaml") == LEVEL_THRESHOLDS

    def test_none_falls_back(self):
        assert load_level_thresholds(None) == LEVEL_THRESHOLDS

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text(
            "levels:\n"
            "  - {level: N, name: Novice, min_xp: 0}\n"
            "  - {level: E, name: Expert, min_xp: 300}\n"
        )
        table = load_level_thresholds(path)
        assert [t.level for t in table] == ["N", "E"]
        assert level_from_xp(150, table).progress_to_next == 50

    def test_invalid_yaml_table_rejected(self, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text("levels:\n  - {level: N, name: Novice, min_xp: 50}\n")
        with pytest.raises(InvalidInput):
            load_level_thresholds(path)


class TestFindThreshold:
    def test_known_level(self):
        assert find_threshold("B1").min_xp == 1000

    def test_unknown_level(self):
        with pytest.raises(InvalidInput):
            find_threshold("Z9")
