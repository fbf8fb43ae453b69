"""Default quest catalog."""

from collections.abc import Iterable
from datetime import datetime

from trainingapp.engine.types import (
    Quest,
    QuestDefinition,
    QuestMetric,
    QuestRule,
    QuestType,
)

DAILY_QUESTS = [
    QuestDefinition(
        title="Premier Entraînement",
        description="Termine une séance d'entraînement aujourd'hui",
        target_value=1,
        experience_reward=50,
        quest_type=QuestType.DAILY,
        rule=QuestRule(QuestMetric.SESSION_COUNT),
    ),
    QuestDefinition(
        title="Volume Builder",
        description="Complete 50 total reps today",
        target_value=50,
        experience_reward=75,
        quest_type=QuestType.DAILY,
        rule=QuestRule(QuestMetric.TOTAL_REPS),
    ),
    QuestDefinition(
        title="Endurance",
        description="Train for 30 minutes today",
        target_value=30,
        experience_reward=80,
        quest_type=QuestType.DAILY,
        rule=QuestRule(QuestMetric.TOTAL_MINUTES),
    ),
]

WEEKLY_QUESTS = [
    QuestDefinition(
        title="Weekly Warrior",
        description="Complete 5 workouts this week",
        target_value=5,
        experience_reward=250,
        quest_type=QuestType.WEEKLY,
        rule=QuestRule(QuestMetric.SESSION_COUNT),
    ),
    QuestDefinition(
        title="Strength Builder",
        description="Lift a total of 1000kg this week",
        target_value=1000,
        experience_reward=300,
        quest_type=QuestType.WEEKLY,
        rule=QuestRule(QuestMetric.TOTAL_VOLUME),
    ),
    QuestDefinition(
        title="Consistency",
        description="Train 3 different days this week",
        target_value=3,
        experience_reward=100,
        quest_type=QuestType.WEEKLY,
        rule=QuestRule(QuestMetric.TRAINING_DAYS),
    ),
]


def default_quest_catalog() -> list[QuestDefinition]:
    """The fixed daily + weekly quest definitions."""
    return DAILY_QUESTS + WEEKLY_QUESTS


def materialize(definitions: Iterable[QuestDefinition], now: datetime) -> list[Quest]:
    """Fresh, unstarted quests for each definition."""
    return [
        Quest(
            title=d.title,
            description=d.description,
            target_value=d.target_value,
            experience_reward=d.experience_reward,
            quest_type=d.quest_type,
            rule=d.rule,
            created_at=now,
        )
        for d in definitions
    ]
