"""Quest model."""

from trainingapp import db
from trainingapp.engine.types import Quest, QuestRule
from trainingapp.utils.clock import utcnow


class QuestRecord(db.Model):
    """Quest assigned to a user."""

    __tablename__ = "quests"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Quest info
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(500), nullable=True)
    quest_type = db.Column(db.String(20), default="daily", nullable=False, index=True)
    rule = db.Column(db.String(50), nullable=False)  # QuestMetric value

    # Requirements
    target_value = db.Column(db.Integer, default=1, nullable=False)
    current_progress = db.Column(db.Integer, default=0, nullable=False)

    # Rewards
    experience_reward = db.Column(db.Integer, default=50, nullable=False)

    # Status
    is_completed = db.Column(db.Boolean, default=False, nullable=False)
    completed_date = db.Column(db.DateTime, nullable=True)
    is_claimed = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    @classmethod
    def from_entry(cls, user_id: int, quest: Quest) -> "QuestRecord":
        record = cls(user_id=user_id)
        record.apply(quest)
        return record

    def apply(self, quest: Quest) -> None:
        """Copy an engine quest onto this row."""
        self.title = quest.title
        self.description = quest.description
        self.quest_type = quest.quest_type.value
        self.rule = quest.rule.metric.value
        self.target_value = quest.target_value
        self.current_progress = quest.current_progress
        self.experience_reward = quest.experience_reward
        self.is_completed = quest.is_completed
        self.completed_date = quest.completed_date
        self.is_claimed = quest.is_claimed
        self.created_at = quest.created_at

    def to_entry(self) -> Quest:
        return Quest(
            id=self.id,
            title=self.title,
            description=self.description,
            target_value=self.target_value,
            experience_reward=self.experience_reward,
            quest_type=self.quest_type,
            rule=QuestRule(self.rule),
            created_at=self.created_at,
            current_progress=self.current_progress,
            is_completed=self.is_completed,
            is_claimed=self.is_claimed,
            completed_date=self.completed_date,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return self.to_entry().to_dict()
