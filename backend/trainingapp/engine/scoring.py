"""XP scoring for exercises and workouts.

Two workout formulas coexist:

- ``score_workout_simple``: stored with every saved workout. Exercise XP plus
  2 XP per minute, scaled by difficulty (0.8 - 1.7) and awakening (x1.5).
- ``score_workout_live``: shown while a session is running. Volume based,
  with duration, intensity, balance and variety bonuses, difficulty scaled
  on its own 1.0 - 1.6 scale and awakening x1.4.

They are kept apart; ``score_workout`` picks one by strategy.
"""

import math
from collections.abc import Iterable

from trainingapp.engine.types import (
    ExerciseEntry,
    ExerciseType,
    ScoringStrategy,
    WorkoutDifficulty,
    WorkoutEntry,
)
from trainingapp.exceptions import require_non_negative

EXERCISE_TYPE_MULTIPLIERS = {
    ExerciseType.STRENGTH: 1.2,
    ExerciseType.CARDIO: 1.0,
    ExerciseType.FLEXIBILITY: 0.8,
    ExerciseType.ENDURANCE: 1.1,
}

SIMPLE_DIFFICULTY_MULTIPLIERS = {
    WorkoutDifficulty.EASY: 0.8,
    WorkoutDifficulty.NORMAL: 1.0,
    WorkoutDifficulty.HARD: 1.3,
    WorkoutDifficulty.NIGHTMARE: 1.7,
}

LIVE_DIFFICULTY_MULTIPLIERS = {
    WorkoutDifficulty.EASY: 1.0,
    WorkoutDifficulty.NORMAL: 1.1,
    WorkoutDifficulty.HARD: 1.3,
    WorkoutDifficulty.NIGHTMARE: 1.6,
}

SIMPLE_AWAKENING_BONUS = 1.5
LIVE_AWAKENING_BONUS = 1.4

# (lower bound in minutes, multiplier), checked from the top
DURATION_BONUS_STEPS = [
    (90, 1.3),
    (60, 1.2),
    (45, 1.1),
    (30, 1.0),
    (15, 0.8),
    (0, 0.5),
]

# (lower bound in volume per minute, multiplier)
INTENSITY_STEPS = [
    (35, 1.4),
    (20, 1.2),
    (10, 1.0),
    (0, 0.8),
]

BALANCE_REFERENCE_MINUTES = 45
BALANCE_BONUS = 1.15
MIN_LIVE_BASE_XP = 10.0
VARIETY_THRESHOLD = 3
VARIETY_BONUS = 1.1


def floor_xp(value: float) -> int:
    """Whole XP. Inputs large enough to overflow the formula are rejected."""
    require_non_negative("xp", value)
    return math.floor(value)


# ============ Exercise ============


def score_exercise(
    sets: int, reps: int, weight: float, exercise_type: ExerciseType
) -> int:
    """XP for one exercise: (sets x reps + weight / 5) x type multiplier."""
    require_non_negative("sets", sets)
    require_non_negative("reps", reps)
    require_non_negative("weight", weight)

    base_xp = sets * reps
    weight_bonus = math.floor(weight / 5)
    multiplier = EXERCISE_TYPE_MULTIPLIERS[ExerciseType(exercise_type)]
    return floor_xp((base_xp + weight_bonus) * multiplier)


def score_exercise_entry(exercise: ExerciseEntry) -> int:
    return score_exercise(
        exercise.sets, exercise.reps, exercise.weight, exercise.exercise_type
    )


# ============ Simple workout formula ============


def score_workout_simple(
    exercises: Iterable[ExerciseEntry],
    duration_seconds: float,
    difficulty: WorkoutDifficulty,
    is_awakening: bool,
) -> int:
    """XP stored with a finished workout."""
    require_non_negative("duration_seconds", duration_seconds)

    exercise_xp = sum(score_exercise_entry(e) for e in exercises)
    duration_bonus = math.floor(duration_seconds / 60) * 2
    multiplier = SIMPLE_DIFFICULTY_MULTIPLIERS[WorkoutDifficulty(difficulty)]
    awakening = SIMPLE_AWAKENING_BONUS if is_awakening else 1.0

    return floor_xp((exercise_xp + duration_bonus) * multiplier * awakening)


# ============ Live session formula ============


def total_volume(exercises: Iterable[ExerciseEntry]) -> float:
    """Sum of sets x reps, each weighted by 1 + weight / 100 when loaded."""
    volume = 0.0
    for exercise in exercises:
        weight_factor = 1 + exercise.weight / 100 if exercise.weight > 0 else 1.0
        volume += exercise.sets * exercise.reps * weight_factor
    return volume


def duration_bonus(duration_minutes: float) -> float:
    for lower_bound, multiplier in DURATION_BONUS_STEPS:
        if duration_minutes >= lower_bound:
            return multiplier
    return DURATION_BONUS_STEPS[-1][1]


def intensity_multiplier(volume: float, duration_minutes: float) -> float:
    """Multiplier from volume per minute (raw volume for a zero-length session)."""
    intensity = volume / duration_minutes if duration_minutes > 0 else volume
    for lower_bound, multiplier in INTENSITY_STEPS:
        if intensity >= lower_bound:
            return multiplier
    return INTENSITY_STEPS[-1][1]


def live_difficulty_multiplier(difficulty: WorkoutDifficulty) -> float:
    return LIVE_DIFFICULTY_MULTIPLIERS[WorkoutDifficulty(difficulty)]


def balance_bonus(duration_minutes: float, difficulty_multiplier: float) -> float:
    """Reward long easy sessions and short hard ones."""
    time_ratio = min(duration_minutes / BALANCE_REFERENCE_MINUTES, 2.0)
    if time_ratio > 1.0 and difficulty_multiplier < 1.3:
        return BALANCE_BONUS
    if time_ratio < 1.0 and difficulty_multiplier > 1.2:
        return BALANCE_BONUS
    return 1.0


def variety_bonus(exercises: Iterable[ExerciseEntry]) -> float:
    distinct = {e.name for e in exercises}
    return VARIETY_BONUS if len(distinct) >= VARIETY_THRESHOLD else 1.0


def live_breakdown(
    exercises: Iterable[ExerciseEntry],
    elapsed_seconds: float,
    difficulty: WorkoutDifficulty,
    is_awakening: bool,
) -> dict:
    """Every sub-score of the live formula, plus the final XP."""
    require_non_negative("elapsed_seconds", elapsed_seconds)
    exercises = list(exercises)
    minutes = elapsed_seconds / 60

    volume = total_volume(exercises)
    difficulty_mult = live_difficulty_multiplier(difficulty)
    parts = {
        "total_volume": volume,
        "duration_bonus": duration_bonus(minutes),
        "intensity_multiplier": intensity_multiplier(volume, minutes),
        "difficulty_multiplier": difficulty_mult,
        "balance_bonus": balance_bonus(minutes, difficulty_mult),
        "awakening_bonus": LIVE_AWAKENING_BONUS if is_awakening else 1.0,
        "base_xp": max(volume * 0.5, MIN_LIVE_BASE_XP),
        "variety_bonus": variety_bonus(exercises),
    }

    final_xp = (
        parts["base_xp"]
        * parts["duration_bonus"]
        * parts["intensity_multiplier"]
        * parts["difficulty_multiplier"]
        * parts["balance_bonus"]
        * parts["awakening_bonus"]
    )
    parts["xp"] = floor_xp(final_xp * parts["variety_bonus"])
    return parts


def score_workout_live(
    exercises: Iterable[ExerciseEntry],
    elapsed_seconds: float,
    difficulty: WorkoutDifficulty,
    is_awakening: bool,
) -> int:
    """XP for an in-progress session."""
    return live_breakdown(exercises, elapsed_seconds, difficulty, is_awakening)["xp"]


# ============ Strategy dispatch ============


def score_workout(
    workout: WorkoutEntry, strategy: ScoringStrategy = ScoringStrategy.SIMPLE
) -> int:
    """Score a workout entry with the requested formula."""
    if ScoringStrategy(strategy) is ScoringStrategy.LIVE:
        return score_workout_live(
            workout.exercises,
            workout.duration_seconds,
            workout.difficulty,
            workout.is_awakening,
        )
    return score_workout_simple(
        workout.exercises,
        workout.duration_seconds,
        workout.difficulty,
        workout.is_awakening,
    )
