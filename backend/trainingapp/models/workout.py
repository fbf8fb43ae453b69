"""Workout and exercise models."""

from trainingapp import db
from trainingapp.engine.types import ExerciseEntry, WorkoutEntry
from trainingapp.utils.clock import utcnow


class WorkoutRecord(db.Model):
    """A finished training session. Never updated after insert."""

    __tablename__ = "workouts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = db.Column(db.String(200), default="Training Session", nullable=False)
    date = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    duration_seconds = db.Column(db.Float, default=0.0, nullable=False)
    difficulty = db.Column(db.String(20), default="normal", nullable=False)
    is_awakening = db.Column(db.Boolean, default=False, nullable=False)
    notes = db.Column(db.Text, default="", nullable=False)

    # Cached at save time
    experience_gained = db.Column(db.Integer, default=0, nullable=False)

    exercises = db.relationship(
        "ExerciseRecord",
        backref="workout",
        order_by="ExerciseRecord.position",
        cascade="all, delete-orphan",
    )

    @classmethod
    def from_entry(cls, user_id: int, entry: WorkoutEntry) -> "WorkoutRecord":
        record = cls(
            user_id=user_id,
            name=entry.name,
            date=entry.date,
            duration_seconds=entry.duration_seconds,
            difficulty=entry.difficulty.value,
            is_awakening=entry.is_awakening,
            notes=entry.notes,
            experience_gained=entry.experience_gained,
        )
        record.exercises = [
            ExerciseRecord.from_entry(position, exercise)
            for position, exercise in enumerate(entry.exercises)
        ]
        return record

    def to_entry(self) -> WorkoutEntry:
        return WorkoutEntry(
            name=self.name,
            date=self.date,
            duration_seconds=self.duration_seconds,
            difficulty=self.difficulty,
            is_awakening=self.is_awakening,
            exercises=tuple(e.to_entry() for e in self.exercises),
            experience_gained=self.experience_gained,
            notes=self.notes,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat() if self.date else None,
            "duration_seconds": self.duration_seconds,
            "difficulty": self.difficulty,
            "is_awakening": self.is_awakening,
            "notes": self.notes,
            "experience_gained": self.experience_gained,
            "exercises": [e.to_dict() for e in self.exercises],
        }


class ExerciseRecord(db.Model):
    """One exercise inside a workout."""

    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    workout_id = db.Column(
        db.Integer,
        db.ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = db.Column(db.Integer, default=0, nullable=False)

    name = db.Column(db.String(200), nullable=False)
    sets = db.Column(db.Integer, default=1, nullable=False)
    reps = db.Column(db.Integer, default=1, nullable=False)
    weight = db.Column(db.Float, default=0.0, nullable=False)  # kg
    rest_time = db.Column(db.Float, default=60.0, nullable=False)  # seconds
    exercise_type = db.Column(db.String(20), default="strength", nullable=False)

    @classmethod
    def from_entry(cls, position: int, entry: ExerciseEntry) -> "ExerciseRecord":
        return cls(
            position=position,
            name=entry.name,
            sets=entry.sets,
            reps=entry.reps,
            weight=entry.weight,
            rest_time=entry.rest_time,
            exercise_type=entry.exercise_type.value,
        )

    def to_entry(self) -> ExerciseEntry:
        return ExerciseEntry(
            name=self.name,
            sets=self.sets,
            reps=self.reps,
            weight=self.weight,
            rest_time=self.rest_time,
            exercise_type=self.exercise_type,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "rest_time": self.rest_time,
            "exercise_type": self.exercise_type,
            "total_volume": self.sets * self.reps * self.weight,
        }
