"""Achievements: one-way unlocks against lifetime statistics."""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from trainingapp.engine.types import (
    Achievement,
    AchievementCategory,
    AchievementDefinition,
    AchievementMetric,
    AchievementRarity,
    CharacterProfile,
    ProgressStats,
)

logger = logging.getLogger(__name__)

DEFAULT_ACHIEVEMENTS = [
    AchievementDefinition(
        code="first_workout",
        name="First Steps",
        description="Finish your first workout",
        icon="figure.walk",
        category=AchievementCategory.MILESTONE,
        rarity=AchievementRarity.COMMON,
        metric=AchievementMetric.TOTAL_WORKOUTS,
        threshold=1,
    ),
    AchievementDefinition(
        code="workouts_10",
        name="Dedicated Hunter",
        description="Finish 10 workouts",
        icon="dumbbell.fill",
        category=AchievementCategory.MILESTONE,
        rarity=AchievementRarity.RARE,
        metric=AchievementMetric.TOTAL_WORKOUTS,
        threshold=10,
    ),
    AchievementDefinition(
        code="workouts_100",
        name="Centurion",
        description="Finish 100 workouts",
        icon="crown.fill",
        category=AchievementCategory.MILESTONE,
        rarity=AchievementRarity.LEGENDARY,
        metric=AchievementMetric.TOTAL_WORKOUTS,
        threshold=100,
    ),
    AchievementDefinition(
        code="streak_3",
        name="On Fire",
        description="Train 3 days in a row",
        icon="flame.fill",
        category=AchievementCategory.CONSISTENCY,
        rarity=AchievementRarity.COMMON,
        metric=AchievementMetric.STREAK_DAYS,
        threshold=3,
    ),
    AchievementDefinition(
        code="streak_7",
        name="Unstoppable",
        description="Train 7 days in a row",
        icon="flame.circle.fill",
        category=AchievementCategory.CONSISTENCY,
        rarity=AchievementRarity.EPIC,
        metric=AchievementMetric.STREAK_DAYS,
        threshold=7,
    ),
    AchievementDefinition(
        code="volume_10000",
        name="Heavy Lifter",
        description="Lift 10,000 kg in total",
        icon="scalemass.fill",
        category=AchievementCategory.STRENGTH,
        rarity=AchievementRarity.RARE,
        metric=AchievementMetric.TOTAL_VOLUME,
        threshold=10000,
    ),
    AchievementDefinition(
        code="minutes_600",
        name="Marathoner",
        description="Train for 10 hours in total",
        icon="timer",
        category=AchievementCategory.ENDURANCE,
        rarity=AchievementRarity.RARE,
        metric=AchievementMetric.TOTAL_MINUTES,
        threshold=600,
    ),
    AchievementDefinition(
        code="level_6",
        name="Fighter Rank",
        description="Reach level 6",
        icon="star.fill",
        category=AchievementCategory.GENERAL,
        rarity=AchievementRarity.EPIC,
        metric=AchievementMetric.LEVEL,
        threshold=6,
    ),
]


def default_achievement_catalog() -> list[AchievementDefinition]:
    return list(DEFAULT_ACHIEVEMENTS)


def definitions_by_code(
    definitions: Iterable[AchievementDefinition] | None = None,
) -> dict[str, AchievementDefinition]:
    if definitions is None:
        definitions = DEFAULT_ACHIEVEMENTS
    return {d.code: d for d in definitions}


def materialize_achievements(
    definitions: Iterable[AchievementDefinition],
) -> list[Achievement]:
    """Locked achievements for a user, one per definition."""
    return [
        Achievement(
            code=d.code,
            name=d.name,
            description=d.description,
            icon=d.icon,
            category=d.category,
            rarity=d.rarity,
        )
        for d in definitions
    ]


def achievement_progress(
    metric: AchievementMetric, stats: ProgressStats, profile: CharacterProfile
) -> int:
    """Current value of the statistic an achievement is measured by."""
    metric = AchievementMetric(metric)
    if metric is AchievementMetric.LEVEL:
        return profile.level
    return getattr(stats, metric.value)


def unlock(achievement: Achievement, now: datetime) -> Achievement:
    """
    Mark an achievement as earned.

    Unlocking is one-way: an achievement that is already unlocked is
    returned unchanged and keeps its original unlock date.
    """
    if achievement.is_unlocked:
        return achievement

    logger.info(f"Achievement unlocked: {achievement.name}")
    return replace(achievement, is_unlocked=True, unlocked_date=now)


def check_achievements(
    achievements: Iterable[Achievement],
    stats: ProgressStats,
    profile: CharacterProfile,
    now: datetime,
    definitions: Iterable[AchievementDefinition] | None = None,
) -> list[Achievement]:
    """
    Unlock every locked achievement whose threshold has been reached.

    Returns the full list; unchanged entries are the same objects.
    Achievements without a known definition are left alone.
    """
    by_code = definitions_by_code(definitions)
    result = []
    for achievement in achievements:
        definition = by_code.get(achievement.code)
        if (
            definition is not None
            and not achievement.is_unlocked
            and achievement_progress(definition.metric, stats, profile)
            >= definition.threshold
        ):
            achievement = unlock(achievement, now)
        result.append(achievement)
    return result
