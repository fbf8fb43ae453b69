"""Character profile model."""

from trainingapp import db
from trainingapp.engine.types import CharacterProfile
from trainingapp.utils.clock import utcnow


class CharacterProfileRecord(db.Model):
    """Stored level / XP / title of a user's character."""

    __tablename__ = "character_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    name = db.Column(db.String(255), default="Hunter", nullable=False)
    level = db.Column(db.Integer, default=1, nullable=False)
    experience = db.Column(db.Integer, default=0, nullable=False)
    experience_to_next_level = db.Column(db.Integer, default=100, nullable=False)
    title = db.Column(db.String(50), default="Newbie Hunter", nullable=False)
    total_workouts = db.Column(db.Integer, default=0, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_entry(self) -> CharacterProfile:
        return CharacterProfile(
            level=self.level,
            experience=self.experience,
            experience_to_next_level=self.experience_to_next_level,
            title=self.title,
            total_workouts=self.total_workouts,
            name=self.name,
            created_at=self.created_at,
        )

    def apply(self, profile: CharacterProfile) -> None:
        """Copy an engine profile onto this row."""
        self.name = profile.name
        self.level = profile.level
        self.experience = profile.experience
        self.experience_to_next_level = profile.experience_to_next_level
        self.title = profile.title
        self.total_workouts = profile.total_workouts
        if profile.created_at is not None:
            self.created_at = profile.created_at

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return self.to_entry().to_dict()
