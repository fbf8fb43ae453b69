"""Progression engine: XP scoring, leveling, quests and achievements.

Pure functions over frozen records. Nothing in this package touches Flask,
the database or the clock; callers pass state and ``now`` in.
"""

from trainingapp.engine.achievements import check_achievements, unlock
from trainingapp.engine.catalog import default_quest_catalog, materialize
from trainingapp.engine.leveling import gain_experience, new_profile, title_for
from trainingapp.engine.periods import Calendar
from trainingapp.engine.quests import claim_quest_reward, recompute_quest_progress
from trainingapp.engine.scoring import (
    score_exercise,
    score_workout,
    score_workout_live,
    score_workout_simple,
)
from trainingapp.engine.stats import compute_stats

__all__ = [
    "Calendar",
    "check_achievements",
    "claim_quest_reward",
    "compute_stats",
    "default_quest_catalog",
    "gain_experience",
    "materialize",
    "new_profile",
    "recompute_quest_progress",
    "score_exercise",
    "score_workout",
    "score_workout_live",
    "score_workout_simple",
    "title_for",
    "unlock",
]
