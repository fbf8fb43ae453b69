"""Persistence for progression state.

The store only loads and saves; all progression rules live in the engine.
Write methods stage changes on the session, ``transaction()`` commits them
as one unit or rolls everything back.
"""

import logging
from collections.abc import Iterable
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from trainingapp import db
from trainingapp.engine.achievements import (
    default_achievement_catalog,
    materialize_achievements,
)
from trainingapp.engine.catalog import default_quest_catalog, materialize
from trainingapp.engine.leveling import new_profile
from trainingapp.engine.types import Achievement, CharacterProfile, Quest, WorkoutEntry
from trainingapp.exceptions import StoreError
from trainingapp.models import (
    AchievementRecord,
    CharacterProfileRecord,
    QuestRecord,
    WorkoutRecord,
)

logger = logging.getLogger(__name__)


class ProgressStore:
    """Load/save access to one user's profile, workouts, quests and achievements."""

    def __init__(self, user_id: int):
        self.user_id = user_id

    @contextmanager
    def transaction(self, operation: str):
        """Commit everything staged inside the block, or nothing."""
        try:
            yield self
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StoreError(operation, e) from e
        except Exception:
            db.session.rollback()
            raise

    # ============ Profile ============

    def _profile_record(self) -> CharacterProfileRecord | None:
        return CharacterProfileRecord.query.filter_by(user_id=self.user_id).first()

    def load_profile(self, now: datetime | None = None) -> CharacterProfile:
        """Load the character, creating the default one on first access."""
        record = self._profile_record()
        if record is None:
            record = CharacterProfileRecord(user_id=self.user_id)
            record.apply(new_profile(created_at=now))
            db.session.add(record)
            db.session.flush()
            logger.info(f"Created character profile for user {self.user_id}")
        return record.to_entry()

    def save_profile(self, profile: CharacterProfile) -> None:
        record = self._profile_record()
        if record is None:
            record = CharacterProfileRecord(user_id=self.user_id)
            db.session.add(record)
        record.apply(profile)

    # ============ Workouts ============

    def load_workouts(self) -> list[WorkoutEntry]:
        """Workout history, oldest first."""
        return [r.to_entry() for r in self.workout_records()]

    def workout_records(self, limit: int | None = None) -> list[WorkoutRecord]:
        query = WorkoutRecord.query.filter_by(user_id=self.user_id)
        if limit is not None:
            return query.order_by(WorkoutRecord.date.desc()).limit(limit).all()
        return query.order_by(WorkoutRecord.date, WorkoutRecord.id).all()

    def add_workout(self, workout: WorkoutEntry) -> WorkoutRecord:
        record = WorkoutRecord.from_entry(self.user_id, workout)
        db.session.add(record)
        db.session.flush()
        return record

    # ============ Quests ============

    def quest_records(self) -> list[QuestRecord]:
        return (
            QuestRecord.query.filter_by(user_id=self.user_id)
            .order_by(QuestRecord.id)
            .all()
        )

    def load_quests(self) -> list[Quest]:
        return [r.to_entry() for r in self.quest_records()]

    def get_quest(self, quest_id: int) -> Quest | None:
        record = QuestRecord.query.filter_by(id=quest_id, user_id=self.user_id).first()
        return record.to_entry() if record else None

    def save_quests(self, quests: Iterable[Quest]) -> list[QuestRecord]:
        """Insert new quests and update existing ones (matched by id)."""
        existing = {r.id: r for r in self.quest_records()}
        saved = []
        for quest in quests:
            record = existing.get(quest.id) if quest.id is not None else None
            if record is None:
                record = QuestRecord.from_entry(self.user_id, quest)
                db.session.add(record)
            else:
                record.apply(quest)
            saved.append(record)
        db.session.flush()
        return saved

    def mark_quest_claimed(self, quest_id: int) -> bool:
        """
        Flip is_claimed on a completed, unclaimed quest in one UPDATE.

        False when no row matched, i.e. the quest was already claimed.
        """
        updated = QuestRecord.query.filter_by(
            id=quest_id, user_id=self.user_id, is_completed=True, is_claimed=False
        ).update({"is_claimed": True})
        return updated == 1

    def seed_quests_if_empty(self, now: datetime) -> bool:
        """Materialize the default catalog when the user has no quests."""
        if QuestRecord.query.filter_by(user_id=self.user_id).count():
            return False
        self.save_quests(materialize(default_quest_catalog(), now))
        logger.info(f"Seeded default quests for user {self.user_id}")
        return True

    # ============ Achievements ============

    def achievement_records(self) -> list[AchievementRecord]:
        return (
            AchievementRecord.query.filter_by(user_id=self.user_id)
            .order_by(AchievementRecord.id)
            .all()
        )

    def load_achievements(self) -> list[Achievement]:
        return [r.to_entry() for r in self.achievement_records()]

    def save_achievements(self, achievements: Iterable[Achievement]) -> None:
        """Insert new achievements and update existing ones (matched by id)."""
        existing = {r.id: r for r in self.achievement_records()}
        for achievement in achievements:
            record = existing.get(achievement.id)
            if record is None:
                db.session.add(AchievementRecord.from_entry(self.user_id, achievement))
            else:
                record.apply(achievement)
        db.session.flush()

    def sync_achievements(self) -> int:
        """Add a locked entry for every catalog achievement the user lacks."""
        held = {r.code for r in self.achievement_records()}
        missing = [d for d in default_achievement_catalog() if d.code not in held]
        if missing:
            self.save_achievements(materialize_achievements(missing))
            logger.info(f"Added {len(missing)} achievements for user {self.user_id}")
        return len(missing)

    # ============ Reset ============

    def reset(self, now: datetime) -> CharacterProfile:
        """Wipe profile, workouts, quests and achievements, then re-seed defaults."""
        for record in self.workout_records():
            db.session.delete(record)
        for record in self.quest_records():
            db.session.delete(record)
        for record in self.achievement_records():
            db.session.delete(record)
        profile_record = self._profile_record()
        if profile_record is not None:
            db.session.delete(profile_record)
        db.session.flush()

        profile = self.load_profile(now)
        self.seed_quests_if_empty(now)
        self.sync_achievements()
        logger.info(f"Reset progression for user {self.user_id}")
        return profile
