"""Tests for XP deposits, level-ups and titles."""

import pytest

from trainingapp.engine import leveling
from trainingapp.engine.types import CharacterProfile
from trainingapp.exceptions import InvalidInputError


class TestTitles:
    """Level to title bands."""

    @pytest.mark.parametrize(
        "level,title",
        [
            (1, "Newbie Hunter"),
            (5, "Newbie Hunter"),
            (6, "Fighter"),
            (15, "Fighter"),
            (16, "Warrior"),
            (30, "Warrior"),
            (31, "Elite Hunter"),
            (50, "Elite Hunter"),
            (51, "Shadow Warrior"),
            (80, "Shadow Warrior"),
            (81, "Shadow Monarch"),
            (500, "Shadow Monarch"),
        ],
    )
    def test_band_edges(self, level, title):
        assert leveling.title_for(level) == title

    def test_out_of_range_level_gets_fallback(self):
        assert leveling.title_for(0) == "Hunter"


class TestNewProfile:
    """Default character."""

    def test_defaults(self, now):
        profile = leveling.new_profile("Jin-Woo", created_at=now)

        assert profile.level == 1
        assert profile.experience == 0
        assert profile.experience_to_next_level == 100
        assert profile.title == "Newbie Hunter"
        assert profile.total_workouts == 0
        assert profile.name == "Jin-Woo"
        assert profile.created_at == now

    def test_threshold_formula(self):
        assert leveling.xp_to_next_level(1) == 100
        assert leveling.xp_to_next_level(7) == 700


class TestGainExperience:
    """Deposits with carry-over."""

    def test_deposit_below_threshold(self):
        profile = leveling.gain_experience(leveling.new_profile(), 40)

        assert profile.level == 1
        assert profile.experience == 40

    def test_exact_threshold_levels_up(self):
        profile = leveling.gain_experience(leveling.new_profile(), 100)

        assert profile.level == 2
        assert profile.experience == 0
        assert profile.experience_to_next_level == 200

    def test_excess_carries_over(self):
        profile = leveling.gain_experience(leveling.new_profile(), 250)

        assert profile.level == 2
        assert profile.experience == 150
        assert profile.experience_to_next_level == 200

    def test_single_deposit_crosses_several_levels(self):
        """100 + 200 + 300 + 400 + 500 = 1500 lands exactly on level 6."""
        profile = leveling.gain_experience(leveling.new_profile(), 1500)

        assert profile.level == 6
        assert profile.experience == 0
        assert profile.experience_to_next_level == 600
        assert profile.title == "Fighter"

    def test_zero_deposit_is_noop(self):
        start = leveling.new_profile()
        profile = leveling.gain_experience(start, 0)
        assert profile == start

    def test_negative_deposit_rejected(self):
        with pytest.raises(InvalidInputError):
            leveling.gain_experience(leveling.new_profile(), -10)

    def test_input_profile_untouched(self):
        start = leveling.new_profile()
        leveling.gain_experience(start, 250)
        assert start.level == 1
        assert start.experience == 0

    def test_invariant_holds_across_many_deposits(self):
        profile = leveling.new_profile()
        for amount in [7, 93, 250, 1, 999, 0, 4321]:
            profile = leveling.gain_experience(profile, amount)
            assert 0 <= profile.experience < profile.experience_to_next_level
            assert profile.experience_to_next_level == profile.level * 100
            assert profile.title == leveling.title_for(profile.level)

    def test_keeps_workout_count_and_name(self):
        start = CharacterProfile(total_workouts=12, name="Cha Hae-In")
        profile = leveling.gain_experience(start, 500)
        assert profile.total_workouts == 12
        assert profile.name == "Cha Hae-In"


class TestDeposit:
    """LevelUp reporting."""

    def test_reports_level_change(self):
        result = leveling.deposit(leveling.new_profile(), 1500)

        assert result.leveled_up
        assert result.levels_gained == 5
        assert result.title_changed
        assert result.old_title == "Newbie Hunter"
        assert result.to_dict()["new_level"] == 6
        assert result.to_dict()["xp_earned"] == 1500

    def test_no_level_change(self):
        result = leveling.deposit(leveling.new_profile(), 10)

        assert not result.leveled_up
        assert not result.title_changed


class TestRecordWorkout:
    def test_increments_total_workouts(self):
        profile = leveling.record_workout(leveling.new_profile())
        assert profile.total_workouts == 1
        assert profile.experience == 0


class TestProfileValidation:
    """CharacterProfile rejects broken states."""

    def test_experience_must_stay_below_threshold(self):
        with pytest.raises(InvalidInputError):
            CharacterProfile(experience=100, experience_to_next_level=100)

    def test_level_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            CharacterProfile(level=0)

    def test_progress_percent(self):
        profile = CharacterProfile(
            level=2, experience=150, experience_to_next_level=200
        )
        assert profile.progress_percent == 75
