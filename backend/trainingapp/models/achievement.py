"""Achievement model."""

from trainingapp import db
from trainingapp.engine.types import Achievement


class AchievementRecord(db.Model):
    """Achievement held by a user, locked or unlocked."""

    __tablename__ = "achievements"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    code = db.Column(db.String(50), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255), nullable=False)
    icon = db.Column(db.String(50), default="trophy.fill", nullable=False)
    category = db.Column(db.String(20), default="general", nullable=False)
    rarity = db.Column(db.String(20), default="common", nullable=False)

    # Unlock status
    is_unlocked = db.Column(db.Boolean, default=False, nullable=False)
    unlocked_date = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("user_id", "code", name="unique_user_achievement"),
    )

    @classmethod
    def from_entry(cls, user_id: int, achievement: Achievement) -> "AchievementRecord":
        record = cls(user_id=user_id)
        record.apply(achievement)
        return record

    def apply(self, achievement: Achievement) -> None:
        self.code = achievement.code
        self.name = achievement.name
        self.description = achievement.description
        self.icon = achievement.icon
        self.category = achievement.category.value
        self.rarity = achievement.rarity.value
        self.is_unlocked = achievement.is_unlocked
        self.unlocked_date = achievement.unlocked_date

    def to_entry(self) -> Achievement:
        return Achievement(
            id=self.id,
            code=self.code,
            name=self.name,
            description=self.description,
            icon=self.icon,
            category=self.category,
            rarity=self.rarity,
            is_unlocked=self.is_unlocked,
            unlocked_date=self.unlocked_date,
        )

    def to_dict(self) -> dict:
        return self.to_entry().to_dict()

    def __repr__(self) -> str:
        return f"<AchievementRecord {self.code} user={self.user_id}>"
