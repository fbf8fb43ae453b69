"""Character leveling: XP deposits, level-ups and titles."""

import logging
from dataclasses import replace

from trainingapp.engine.types import CharacterProfile, LevelUp
from trainingapp.exceptions import require_non_negative

logger = logging.getLogger(__name__)

XP_PER_LEVEL = 100

# (first level, last level or None for open-ended, title)
TITLE_BANDS = [
    (1, 5, "Newbie Hunter"),
    (6, 15, "Fighter"),
    (16, 30, "Warrior"),
    (31, 50, "Elite Hunter"),
    (51, 80, "Shadow Warrior"),
    (81, None, "Shadow Monarch"),
]
FALLBACK_TITLE = "Hunter"


def title_for(level: int) -> str:
    """Display title for a level."""
    for first, last, title in TITLE_BANDS:
        if level >= first and (last is None or level <= last):
            return title
    return FALLBACK_TITLE


def xp_to_next_level(level: int) -> int:
    """XP needed to leave ``level``."""
    return level * XP_PER_LEVEL


def new_profile(name: str = "Hunter", created_at=None) -> CharacterProfile:
    """Default level 1 character."""
    return CharacterProfile(
        level=1,
        experience=0,
        experience_to_next_level=xp_to_next_level(1),
        title=title_for(1),
        total_workouts=0,
        name=name,
        created_at=created_at,
    )


def gain_experience(profile: CharacterProfile, amount: int) -> CharacterProfile:
    """
    Deposit XP and roll over as many levels as it pays for.

    Excess XP carries into the next level. Always returns a profile with
    0 <= experience < experience_to_next_level.
    """
    require_non_negative("amount", amount)

    level = profile.level
    experience = profile.experience + amount
    threshold = profile.experience_to_next_level
    title = profile.title

    while experience >= threshold:
        level += 1
        experience -= threshold
        threshold = xp_to_next_level(level)
        title = title_for(level)

    if level > profile.level:
        logger.info(
            f"{profile.name} leveled up from {profile.level} to {level} ({title})"
        )

    return replace(
        profile,
        level=level,
        experience=experience,
        experience_to_next_level=threshold,
        title=title,
    )


def deposit(profile: CharacterProfile, amount: int) -> LevelUp:
    """gain_experience, keeping the before/after details for reporting."""
    return LevelUp(
        profile=gain_experience(profile, amount),
        xp_gained=amount,
        old_level=profile.level,
        old_title=profile.title,
    )


def record_workout(profile: CharacterProfile) -> CharacterProfile:
    """Count one more finished workout."""
    return replace(profile, total_workouts=profile.total_workouts + 1)


def lifetime_experience(profile: CharacterProfile) -> int:
    """All XP ever earned: the cost of the levels passed plus current XP."""
    level = profile.level
    return XP_PER_LEVEL * level * (level - 1) // 2 + profile.experience
