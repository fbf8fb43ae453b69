"""Database models."""

from trainingapp.models.achievement import AchievementRecord
from trainingapp.models.character import CharacterProfileRecord
from trainingapp.models.quest import QuestRecord
from trainingapp.models.user import User
from trainingapp.models.workout import ExerciseRecord, WorkoutRecord

__all__ = [
    "User",
    "CharacterProfileRecord",
    "WorkoutRecord",
    "ExerciseRecord",
    "QuestRecord",
    "AchievementRecord",
]
