"""Calendar windows for quest periods.

Naive datetimes are read as UTC (the store keeps UTC timestamps) and
converted to the configured zone before any day or week boundary is taken.
"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from trainingapp.engine.types import QuestType


class Calendar:
    """Computes local day / week / month boundaries."""

    def __init__(self, tz: str = "UTC", first_weekday: int = 0):
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0-6, got {first_weekday}")
        self.tz = ZoneInfo(tz)
        self.first_weekday = first_weekday

    def localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.tz)

    def local_date(self, moment: datetime) -> date:
        return self.localize(moment).date()

    def _start_of(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def day_window(self, now: datetime) -> tuple[datetime, datetime]:
        today = self.local_date(now)
        return self._start_of(today), self._start_of(today + timedelta(days=1))

    def week_window(self, now: datetime) -> tuple[datetime, datetime]:
        today = self.local_date(now)
        offset = (today.weekday() - self.first_weekday) % 7
        week_start = today - timedelta(days=offset)
        return self._start_of(week_start), self._start_of(
            week_start + timedelta(days=7)
        )

    def month_window(self, now: datetime) -> tuple[datetime, datetime]:
        today = self.local_date(now)
        month_start = today.replace(day=1)
        if month_start.month == 12:
            next_month = month_start.replace(year=month_start.year + 1, month=1)
        else:
            next_month = month_start.replace(month=month_start.month + 1)
        return self._start_of(month_start), self._start_of(next_month)

    def window(
        self, quest_type: QuestType, now: datetime, since: datetime | None = None
    ) -> tuple[datetime, datetime]:
        """Half-open [start, end) window a quest of this type measures."""
        quest_type = QuestType(quest_type)
        if quest_type is QuestType.DAILY:
            return self.day_window(now)
        if quest_type is QuestType.WEEKLY:
            return self.week_window(now)
        if quest_type is QuestType.MONTHLY:
            return self.month_window(now)
        # Special quests count everything since they were handed out
        if since is None:
            start = datetime.min.replace(tzinfo=timezone.utc)
        else:
            start = self.localize(since)
        return start, self.localize(now) + timedelta(microseconds=1)

    def contains(self, window: tuple[datetime, datetime], moment: datetime) -> bool:
        start, end = window
        return start <= self.localize(moment) < end
