"""Value types for the progression engine.

Every record is a frozen dataclass. Update functions elsewhere in the engine
return new records with ``dataclasses.replace`` instead of mutating in place.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from trainingapp.exceptions import InvalidInputError, require_non_negative


class ExerciseType(str, Enum):
    """Exercise category, each with its own XP multiplier."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    ENDURANCE = "endurance"


class WorkoutDifficulty(str, Enum):
    """Workout difficulty chosen by the player."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    NIGHTMARE = "nightmare"


class QuestType(str, Enum):
    """Quest period."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    SPECIAL = "special"


class QuestMetric(str, Enum):
    """Activity metric a quest rule measures."""

    SESSION_COUNT = "session_count"
    TOTAL_REPS = "total_reps"
    TOTAL_MINUTES = "total_minutes"
    TRAINING_DAYS = "training_days"
    TOTAL_VOLUME = "total_volume"


class ScoringStrategy(str, Enum):
    """Which workout XP formula to apply."""

    SIMPLE = "simple"
    LIVE = "live"


class AchievementCategory(str, Enum):
    """Achievement grouping shown in the trophy room."""

    GENERAL = "general"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    CONSISTENCY = "consistency"
    MILESTONE = "milestone"


class AchievementRarity(str, Enum):
    """How hard an achievement is to get."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


RARITY_COLORS = {
    AchievementRarity.COMMON: "#9CA3AF",
    AchievementRarity.RARE: "#4F46E5",
    AchievementRarity.EPIC: "#9333EA",
    AchievementRarity.LEGENDARY: "#F59E0B",
}


class AchievementMetric(str, Enum):
    """Lifetime statistic an achievement threshold is checked against."""

    TOTAL_WORKOUTS = "total_workouts"
    TOTAL_MINUTES = "total_minutes"
    TOTAL_VOLUME = "total_volume"
    STREAK_DAYS = "streak_days"
    LEVEL = "level"


@dataclass(frozen=True)
class QuestRule:
    """Structured quest rule, resolved when the quest is defined."""

    metric: QuestMetric

    def __post_init__(self):
        object.__setattr__(self, "metric", QuestMetric(self.metric))


@dataclass(frozen=True)
class CharacterProfile:
    """The player's character: level, XP within level and title."""

    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 100
    title: str = "Newbie Hunter"
    total_workouts: int = 0
    name: str = "Hunter"
    created_at: datetime | None = None

    def __post_init__(self):
        if self.level < 1:
            raise InvalidInputError("level", self.level, "must be >= 1")
        if self.experience_to_next_level <= 0:
            raise InvalidInputError(
                "experience_to_next_level", self.experience_to_next_level, "must be > 0"
            )
        require_non_negative("experience", self.experience)
        require_non_negative("total_workouts", self.total_workouts)
        if self.experience >= self.experience_to_next_level:
            raise InvalidInputError(
                "experience",
                self.experience,
                f"must be < experience_to_next_level ({self.experience_to_next_level})",
            )

    @property
    def progress_percent(self) -> int:
        """Progress percentage within the current level."""
        return int(self.experience / self.experience_to_next_level * 100)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "level": self.level,
            "experience": self.experience,
            "experience_to_next_level": self.experience_to_next_level,
            "xp_progress_percent": self.progress_percent,
            "title": self.title,
            "total_workouts": self.total_workouts,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ExerciseEntry:
    """A single exercise logged inside a workout."""

    name: str
    sets: int = 1
    reps: int = 1
    weight: float = 0.0
    rest_time: float = 60.0
    exercise_type: ExerciseType = ExerciseType.STRENGTH

    def __post_init__(self):
        if self.sets < 1:
            raise InvalidInputError("sets", self.sets, "must be >= 1")
        if self.reps < 1:
            raise InvalidInputError("reps", self.reps, "must be >= 1")
        require_non_negative("weight", self.weight)
        require_non_negative("rest_time", self.rest_time)
        # Accept raw strings coming from JSON payloads
        object.__setattr__(self, "exercise_type", ExerciseType(self.exercise_type))

    @property
    def repetitions(self) -> int:
        return self.sets * self.reps

    @property
    def total_volume(self) -> float:
        """Total load moved: sets x reps x weight (kg)."""
        return self.sets * self.reps * self.weight


@dataclass(frozen=True)
class WorkoutEntry:
    """A finished training session."""

    name: str
    date: datetime
    duration_seconds: float = 0.0
    difficulty: WorkoutDifficulty = WorkoutDifficulty.NORMAL
    is_awakening: bool = False
    exercises: tuple[ExerciseEntry, ...] = ()
    experience_gained: int = 0
    notes: str = ""

    def __post_init__(self):
        require_non_negative("duration_seconds", self.duration_seconds)
        require_non_negative("experience_gained", self.experience_gained)
        object.__setattr__(self, "difficulty", WorkoutDifficulty(self.difficulty))
        object.__setattr__(self, "exercises", tuple(self.exercises))

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60


@dataclass(frozen=True)
class QuestDefinition:
    """Static quest template used to seed Quest instances."""

    title: str
    description: str
    target_value: int
    experience_reward: int
    quest_type: QuestType
    rule: QuestRule

    def __post_init__(self):
        if self.target_value <= 0:
            raise InvalidInputError("target_value", self.target_value, "must be > 0")
        require_non_negative("experience_reward", self.experience_reward)


@dataclass(frozen=True)
class Quest:
    """A tracked objective with a one-time claimable XP reward."""

    title: str
    description: str
    target_value: int
    experience_reward: int
    quest_type: QuestType
    rule: QuestRule
    created_at: datetime
    current_progress: int = 0
    is_completed: bool = False
    is_claimed: bool = False
    completed_date: datetime | None = None
    id: int | None = None

    def __post_init__(self):
        if self.target_value <= 0:
            raise InvalidInputError("target_value", self.target_value, "must be > 0")
        require_non_negative("experience_reward", self.experience_reward)
        if not 0 <= self.current_progress <= self.target_value:
            raise InvalidInputError(
                "current_progress",
                self.current_progress,
                f"must be within [0, {self.target_value}]",
            )
        if self.is_claimed and not self.is_completed:
            raise InvalidInputError(
                "is_claimed", self.is_claimed, "requires a completed quest"
            )
        object.__setattr__(self, "quest_type", QuestType(self.quest_type))

    @property
    def progress_percentage(self) -> float:
        """Progress as a fraction in [0, 1]."""
        return self.current_progress / self.target_value

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "quest_type": self.quest_type.value,
            "rule": self.rule.metric.value,
            "target_value": self.target_value,
            "current_progress": self.current_progress,
            "progress_percent": int(self.progress_percentage * 100),
            "experience_reward": self.experience_reward,
            "is_completed": self.is_completed,
            "completed_date": (
                self.completed_date.isoformat() if self.completed_date else None
            ),
            "is_claimed": self.is_claimed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ActivitySnapshot:
    """Workout history handed to the quest tracker."""

    workouts: tuple[WorkoutEntry, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "workouts", tuple(self.workouts))


@dataclass(frozen=True)
class LevelUp:
    """Outcome of an XP deposit."""

    profile: CharacterProfile
    xp_gained: int
    old_level: int
    old_title: str

    @property
    def levels_gained(self) -> int:
        return self.profile.level - self.old_level

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0

    @property
    def title_changed(self) -> bool:
        return self.profile.title != self.old_title

    def to_dict(self) -> dict:
        return {
            "xp_earned": self.xp_gained,
            "level_up": self.leveled_up,
            "old_level": self.old_level,
            "new_level": self.profile.level,
            "levels_gained": self.levels_gained,
            "title": self.profile.title,
            "title_changed": self.title_changed,
        }


@dataclass(frozen=True)
class AchievementDefinition:
    """Static achievement template with its unlock threshold."""

    code: str
    name: str
    description: str
    icon: str
    category: AchievementCategory
    rarity: AchievementRarity
    metric: AchievementMetric
    threshold: int

    def __post_init__(self):
        if self.threshold <= 0:
            raise InvalidInputError("threshold", self.threshold, "must be > 0")
        object.__setattr__(self, "category", AchievementCategory(self.category))
        object.__setattr__(self, "rarity", AchievementRarity(self.rarity))
        object.__setattr__(self, "metric", AchievementMetric(self.metric))


@dataclass(frozen=True)
class Achievement:
    """A trophy a user holds, locked until unlocked once."""

    code: str
    name: str
    description: str
    icon: str = "trophy.fill"
    category: AchievementCategory = AchievementCategory.GENERAL
    rarity: AchievementRarity = AchievementRarity.COMMON
    is_unlocked: bool = False
    unlocked_date: datetime | None = None
    id: int | None = None

    def __post_init__(self):
        if self.is_unlocked != (self.unlocked_date is not None):
            raise InvalidInputError(
                "unlocked_date",
                self.unlocked_date,
                "must be set exactly when the achievement is unlocked",
            )
        object.__setattr__(self, "category", AchievementCategory(self.category))
        object.__setattr__(self, "rarity", AchievementRarity(self.rarity))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "category": self.category.value,
            "rarity": self.rarity.value,
            "color": RARITY_COLORS[self.rarity],
            "is_unlocked": self.is_unlocked,
            "unlocked_date": (
                self.unlocked_date.isoformat() if self.unlocked_date else None
            ),
        }


@dataclass(frozen=True)
class ProgressStats:
    """Lifetime and current-week figures for the progress screen."""

    total_workouts: int = 0
    total_xp: int = 0
    streak_days: int = 0
    best_week: int = 0
    total_minutes: int = 0
    total_volume: int = 0
    # (weekday label, workouts) for the current week, first weekday first
    weekly_frequency: tuple[tuple[str, int], ...] = ()

    def to_dict(self) -> dict:
        return {
            "total_workouts": self.total_workouts,
            "total_xp": self.total_xp,
            "streak_days": self.streak_days,
            "best_week": self.best_week,
            "total_minutes": self.total_minutes,
            "total_volume": self.total_volume,
            "weekly_frequency": [
                {"day": day, "count": count} for day, count in self.weekly_frequency
            ],
        }
