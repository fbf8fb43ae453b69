"""Progress statistics derived from workout history."""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timedelta

from trainingapp.engine.leveling import lifetime_experience
from trainingapp.engine.periods import Calendar
from trainingapp.engine.quests import measure
from trainingapp.engine.types import (
    CharacterProfile,
    ProgressStats,
    QuestMetric,
    QuestRule,
    WorkoutEntry,
)

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def training_streak(
    workouts: Iterable[WorkoutEntry], now: datetime, calendar: Calendar
) -> int:
    """
    Consecutive local days with at least one workout, ending today.

    A streak still counts until the day after its last workout is over,
    so it ends yesterday when nothing has been logged yet today.
    """
    days = {calendar.local_date(w.date) for w in workouts}
    day = calendar.local_date(now)
    if day not in days:
        day -= timedelta(days=1)

    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def best_week(workouts: Iterable[WorkoutEntry], calendar: Calendar) -> int:
    """Most workouts logged in any single calendar week."""
    weeks = Counter(calendar.week_window(w.date)[0] for w in workouts)
    return max(weeks.values(), default=0)


def weekly_frequency(
    workouts: Iterable[WorkoutEntry], now: datetime, calendar: Calendar
) -> tuple[tuple[str, int], ...]:
    """Workouts per weekday in the current week, first weekday first."""
    window = calendar.week_window(now)
    counts = [0] * 7
    for workout in workouts:
        if calendar.contains(window, workout.date):
            counts[calendar.local_date(workout.date).weekday()] += 1

    order = [(calendar.first_weekday + i) % 7 for i in range(7)]
    return tuple((WEEKDAY_LABELS[day], counts[day]) for day in order)


def compute_stats(
    workouts: Iterable[WorkoutEntry],
    profile: CharacterProfile,
    now: datetime,
    calendar: Calendar | None = None,
) -> ProgressStats:
    calendar = calendar or Calendar()
    workouts = list(workouts)
    return ProgressStats(
        total_workouts=len(workouts),
        total_xp=lifetime_experience(profile),
        streak_days=training_streak(workouts, now, calendar),
        best_week=best_week(workouts, calendar),
        total_minutes=measure(QuestRule(QuestMetric.TOTAL_MINUTES), workouts),
        total_volume=measure(QuestRule(QuestMetric.TOTAL_VOLUME), workouts),
        weekly_frequency=weekly_frequency(workouts, now, calendar),
    )
