"""Progression session: one user's character, workouts, quests and achievements."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from flask import current_app

from trainingapp.engine import achievements as achievement_engine
from trainingapp.engine import leveling, quests as quest_engine, scoring
from trainingapp.engine import stats as stats_engine
from trainingapp.engine.periods import Calendar
from trainingapp.engine.types import (
    Achievement,
    ActivitySnapshot,
    CharacterProfile,
    ExerciseEntry,
    ProgressStats,
    Quest,
    QuestType,
    ScoringStrategy,
    WorkoutDifficulty,
    WorkoutEntry,
)
from trainingapp.services.store import ProgressStore
from trainingapp.utils.clock import utcnow

logger = logging.getLogger(__name__)


def calendar_from_config() -> Calendar:
    """Calendar configured from QUEST_TIMEZONE / QUEST_WEEK_START."""
    return Calendar(
        current_app.config.get("QUEST_TIMEZONE", "UTC"),
        current_app.config.get("QUEST_WEEK_START", 0),
    )


class ProgressionSession:
    """
    Application-context handle on the one profile owned by a user.

    Every mutating call loads state from the store, runs the engine and saves
    the result in a single transaction. Callers serialize calls per user.
    """

    def __init__(
        self,
        user_id: int,
        clock: Callable[[], datetime] = utcnow,
        calendar: Calendar | None = None,
    ):
        self.user_id = user_id
        self.clock = clock
        self.calendar = calendar or calendar_from_config()
        self.store = ProgressStore(user_id)

    # ============ Reads ============

    def profile(self) -> CharacterProfile:
        with self.store.transaction("load_profile"):
            return self.store.load_profile(self.clock())

    def workouts(self, limit: int | None = None):
        return self.store.workout_records(limit)

    def quests(self, quest_type: QuestType | None = None):
        """Quest records after a recompute pass, seeding an empty store first."""
        self.refresh_quests()
        records = self.store.quest_records()
        if quest_type is not None:
            records = [r for r in records if r.quest_type == QuestType(quest_type).value]
        return records

    # ============ Workouts ============

    def log_workout(
        self,
        name: str,
        exercises: Iterable[ExerciseEntry],
        duration_seconds: float,
        difficulty: WorkoutDifficulty = WorkoutDifficulty.NORMAL,
        is_awakening: bool = False,
        strategy: ScoringStrategy = ScoringStrategy.SIMPLE,
        date: datetime | None = None,
        notes: str = "",
    ) -> dict:
        """
        Save a finished workout and feed it through the engine.

        The XP is computed once here and cached on the workout. The profile
        gains that XP and one workout, then quests are recomputed.
        """
        now = self.clock()
        workout = WorkoutEntry(
            name=name or "Training Session",
            date=date or now,
            duration_seconds=duration_seconds,
            difficulty=difficulty,
            is_awakening=is_awakening,
            exercises=tuple(exercises),
            notes=notes,
        )
        xp = scoring.score_workout(workout, strategy)
        workout = replace(workout, experience_gained=xp)

        with self.store.transaction("log_workout"):
            record = self.store.add_workout(workout)

            profile = leveling.record_workout(self.store.load_profile(now))
            level_up = leveling.deposit(profile, xp)
            self.store.save_profile(level_up.profile)

            completed = self._recompute(now)
            unlocked = self._check_achievements(now, level_up.profile)

        logger.info(
            f"User {self.user_id} logged workout '{workout.name}' for {xp} XP "
            f"({ScoringStrategy(strategy).value} scoring)"
        )

        return {
            "workout": record.to_dict(),
            "xp_info": level_up.to_dict(),
            "completed_quests": [q.title for q in completed],
            "unlocked_achievements": [a.name for a in unlocked],
        }

    def preview_live_xp(
        self,
        exercises: Iterable[ExerciseEntry],
        elapsed_seconds: float,
        difficulty: WorkoutDifficulty = WorkoutDifficulty.NORMAL,
        is_awakening: bool = False,
    ) -> dict:
        """XP the running session is worth right now, with its sub-scores."""
        return scoring.live_breakdown(
            exercises, elapsed_seconds, difficulty, is_awakening
        )

    # ============ Quests ============

    def _recompute(self, now: datetime) -> list[Quest]:
        """Recompute pass inside an open transaction. Returns newly completed."""
        self.store.seed_quests_if_empty(now)
        before = self.store.load_quests()
        snapshot = ActivitySnapshot(self.store.load_workouts())
        after = quest_engine.recompute_all(before, snapshot, now, self.calendar)

        changed = [new for old, new in zip(before, after) if new is not old]
        if changed:
            self.store.save_quests(changed)
        return [
            new
            for old, new in zip(before, after)
            if new.is_completed and not old.is_completed
        ]

    def refresh_quests(self) -> list[Quest]:
        with self.store.transaction("refresh_quests"):
            return self._recompute(self.clock())

    def claim_quest(self, quest_id: int) -> tuple[Quest, CharacterProfile, bool] | None:
        """
        Claim a quest's reward.

        Returns None for an unknown quest. Otherwise (quest, profile, claimed),
        where claimed is False when nothing changed.
        """
        with self.store.transaction("claim_quest"):
            quest = self.store.get_quest(quest_id)
            if quest is None:
                return None

            profile = self.store.load_profile(self.clock())
            new_quest, new_profile = quest_engine.claim_quest_reward(quest, profile)
            claimed = new_quest is not quest
            if claimed and not self.store.mark_quest_claimed(quest.id):
                # Another request claimed it between our read and write
                logger.info(f"Quest {quest.id} already claimed, reward not paid again")
                new_profile, claimed = profile, False
            if claimed:
                self.store.save_profile(new_profile)
                self._check_achievements(self.clock(), new_profile)

        return new_quest, new_profile, claimed

    # ============ Achievements and stats ============

    def _stats(self, now: datetime, profile: CharacterProfile) -> ProgressStats:
        return stats_engine.compute_stats(
            self.store.load_workouts(), profile, now, self.calendar
        )

    def _check_achievements(
        self, now: datetime, profile: CharacterProfile
    ) -> list[Achievement]:
        """Unlock pass inside an open transaction. Returns newly unlocked."""
        self.store.sync_achievements()
        before = self.store.load_achievements()
        after = achievement_engine.check_achievements(
            before, self._stats(now, profile), profile, now
        )

        unlocked = [new for old, new in zip(before, after) if new is not old]
        if unlocked:
            self.store.save_achievements(unlocked)
        return unlocked

    def stats(self) -> ProgressStats:
        now = self.clock()
        with self.store.transaction("stats"):
            return self._stats(now, self.store.load_profile(now))

    def achievements(self) -> list[dict]:
        """Every achievement with its progress toward the threshold."""
        now = self.clock()
        with self.store.transaction("achievements"):
            profile = self.store.load_profile(now)
            self._check_achievements(now, profile)
            stats = self._stats(now, profile)
            achievements = self.store.load_achievements()

        definitions = achievement_engine.definitions_by_code()
        result = []
        for achievement in achievements:
            data = achievement.to_dict()
            definition = definitions.get(achievement.code)
            if definition is not None:
                value = achievement_engine.achievement_progress(
                    definition.metric, stats, profile
                )
                # A broken streak does not take an unlocked trophy back
                if achievement.is_unlocked:
                    value = definition.threshold
                data["progress"] = min(value, definition.threshold)
                data["target"] = definition.threshold
            result.append(data)
        return result

    # ============ Reset ============

    def reset(self) -> CharacterProfile:
        with self.store.transaction("reset"):
            return self.store.reset(self.clock())
