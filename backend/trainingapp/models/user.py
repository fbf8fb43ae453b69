"""User model."""

from trainingapp import db
from trainingapp.utils.clock import utcnow


class User(db.Model):
    """An account owning exactly one character profile."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    # Relationships
    workouts = db.relationship(
        "WorkoutRecord", backref="user", lazy="dynamic", cascade="all, delete-orphan"
    )
    quests = db.relationship(
        "QuestRecord", backref="user", lazy="dynamic", cascade="all, delete-orphan"
    )
    achievements = db.relationship(
        "AchievementRecord",
        backref="user",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def to_dict(self) -> dict:
        """Convert user to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<User {self.name}>"
