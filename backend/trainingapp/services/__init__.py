"""Business logic services."""

from trainingapp.services.progression_service import ProgressionSession
from trainingapp.services.store import ProgressStore

__all__ = [
    "ProgressionSession",
    "ProgressStore",
]
