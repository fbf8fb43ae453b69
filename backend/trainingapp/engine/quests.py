"""Quest progress tracking and reward claims.

Lifecycle per quest: active -> completed (unclaimed) -> claimed. Nothing ever
moves backwards. Progress is recomputed from the workout history of the
quest's period on every pass until the quest completes; after that the
completion snapshot is frozen.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from trainingapp.engine.leveling import gain_experience
from trainingapp.engine.periods import Calendar
from trainingapp.engine.types import (
    ActivitySnapshot,
    CharacterProfile,
    Quest,
    QuestMetric,
    QuestRule,
    WorkoutEntry,
)

logger = logging.getLogger(__name__)

_default_calendar = Calendar()


def measure(
    rule: QuestRule, workouts: Iterable[WorkoutEntry], calendar: Calendar | None = None
) -> int:
    """Raw metric value of ``rule`` over ``workouts``."""
    calendar = calendar or _default_calendar
    workouts = list(workouts)
    metric = QuestMetric(rule.metric)

    if metric is QuestMetric.SESSION_COUNT:
        return len(workouts)
    if metric is QuestMetric.TOTAL_REPS:
        return sum(e.repetitions for w in workouts for e in w.exercises)
    if metric is QuestMetric.TOTAL_MINUTES:
        return math.floor(sum(w.duration_seconds for w in workouts) / 60)
    if metric is QuestMetric.TRAINING_DAYS:
        return len({calendar.local_date(w.date) for w in workouts})
    if metric is QuestMetric.TOTAL_VOLUME:
        return math.floor(sum(e.total_volume for w in workouts for e in w.exercises))

    raise ValueError(f"Unknown quest metric: {metric}")


def workouts_in_period(
    quest: Quest, snapshot: ActivitySnapshot, now: datetime, calendar: Calendar
) -> list[WorkoutEntry]:
    window = calendar.window(quest.quest_type, now, since=quest.created_at)
    return [w for w in snapshot.workouts if calendar.contains(window, w.date)]


def recompute_quest_progress(
    quest: Quest,
    snapshot: ActivitySnapshot,
    now: datetime,
    calendar: Calendar | None = None,
) -> Quest:
    """
    Derive the quest's progress fresh from the activity snapshot.

    Completed quests are returned untouched. Progress is clamped to the
    target; reaching it marks the quest completed and stamps ``now``.
    """
    if quest.is_completed:
        return quest

    calendar = calendar or _default_calendar
    workouts = workouts_in_period(quest, snapshot, now, calendar)
    progress = min(measure(quest.rule, workouts, calendar), quest.target_value)

    if progress >= quest.target_value:
        logger.info(f"Quest '{quest.title}' completed ({progress}/{quest.target_value})")
        return replace(
            quest, current_progress=progress, is_completed=True, completed_date=now
        )

    if progress == quest.current_progress:
        return quest
    return replace(quest, current_progress=progress)


def recompute_all(
    quests: Iterable[Quest],
    snapshot: ActivitySnapshot,
    now: datetime,
    calendar: Calendar | None = None,
) -> list[Quest]:
    """One recompute pass over a quest list, preserving order."""
    return [recompute_quest_progress(q, snapshot, now, calendar) for q in quests]


def can_claim(quest: Quest) -> bool:
    return quest.is_completed and not quest.is_claimed


def claim_quest_reward(
    quest: Quest, profile: CharacterProfile
) -> tuple[Quest, CharacterProfile]:
    """
    Mark the quest claimed and deposit its reward into the profile.

    Claiming an unfinished or already claimed quest changes nothing and hands
    back the very same objects.
    """
    if not can_claim(quest):
        logger.info(
            f"Ignored claim for quest '{quest.title}' "
            f"(completed={quest.is_completed}, claimed={quest.is_claimed})"
        )
        return quest, profile

    claimed = replace(quest, is_claimed=True)
    updated_profile = gain_experience(profile, quest.experience_reward)
    logger.info(
        f"Quest '{quest.title}' claimed for {quest.experience_reward} XP "
        f"by {profile.name}"
    )
    return claimed, updated_profile
