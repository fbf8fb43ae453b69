"""Tests for progress statistics and GET /profile/stats."""

from datetime import datetime

from trainingapp.engine import stats
from trainingapp.engine.leveling import (
    gain_experience,
    lifetime_experience,
    new_profile,
)
from trainingapp.engine.periods import Calendar
from trainingapp.engine.types import WorkoutEntry
from trainingapp.services import ProgressionSession


def session_on(day, hour=9, duration_seconds=0, exercises=()):
    return WorkoutEntry(
        name="Session",
        date=datetime(2025, 6, day, hour),
        duration_seconds=duration_seconds,
        exercises=exercises,
    )


class TestStreak:
    """Consecutive training days."""

    def test_streak_ending_today(self, now):
        workouts = [session_on(9), session_on(10), session_on(11)]

        assert stats.training_streak(workouts, now, Calendar()) == 3

    def test_streak_survives_until_today_is_over(self, now):
        workouts = [session_on(9), session_on(10)]

        assert stats.training_streak(workouts, now, Calendar()) == 2

    def test_gap_breaks_streak(self, now):
        workouts = [session_on(7), session_on(8), session_on(10)]

        assert stats.training_streak(workouts, now, Calendar()) == 1

    def test_two_sessions_one_day(self, now):
        workouts = [session_on(11, hour=7), session_on(11, hour=12)]

        assert stats.training_streak(workouts, now, Calendar()) == 1

    def test_old_history_has_no_streak(self, now):
        assert stats.training_streak([session_on(1)], now, Calendar()) == 0
        assert stats.training_streak([], now, Calendar()) == 0

    def test_days_are_local(self):
        """Both sessions fall on 06-10 in UTC but on different days in Tokyo."""
        workouts = [
            WorkoutEntry(name="a", date=datetime(2025, 6, 10, 1)),
            WorkoutEntry(name="b", date=datetime(2025, 6, 10, 20)),
        ]
        now = datetime(2025, 6, 11, 10)

        assert stats.training_streak(workouts, now, Calendar()) == 1
        assert stats.training_streak(workouts, now, Calendar("Asia/Tokyo")) == 2


# Sunday 06-08 belongs to the previous Monday-based week
THIS_WEEK = [session_on(8), session_on(9), session_on(9, hour=18), session_on(11)]


class TestWeeks:
    """Best week and this week's frequency."""

    def test_best_week(self):
        # Mon 06-02 .. Sun 06-08 has three, the current week two
        workouts = [session_on(d) for d in (2, 4, 8, 9, 11)]

        assert stats.best_week(workouts, Calendar()) == 3
        assert stats.best_week([], Calendar()) == 0

    def test_frequency_monday_first(self, now):
        workouts = THIS_WEEK

        frequency = stats.weekly_frequency(workouts, now, Calendar())

        assert frequency == (
            ("Mon", 2),
            ("Tue", 0),
            ("Wed", 1),
            ("Thu", 0),
            ("Fri", 0),
            ("Sat", 0),
            ("Sun", 0),
        )

    def test_frequency_sunday_first(self, now):
        workouts = THIS_WEEK

        frequency = stats.weekly_frequency(workouts, now, Calendar(first_weekday=6))

        assert frequency[0] == ("Sun", 1)
        assert frequency[1] == ("Mon", 2)
        assert [day for day, _ in frequency][-1] == "Sat"


class TestComputeStats:
    def test_lifetime_experience(self):
        assert lifetime_experience(new_profile()) == 0

        profile = gain_experience(new_profile(), 1234)

        assert lifetime_experience(profile) == 1234

    def test_totals(self, now, bench_press):
        workouts = [
            session_on(10, duration_seconds=1800, exercises=[bench_press]),
            session_on(11, duration_seconds=1230, exercises=[bench_press]),
        ]
        profile = gain_experience(new_profile(), 250)

        result = stats.compute_stats(workouts, profile, now, Calendar())

        assert result.total_workouts == 2
        assert result.total_xp == 250
        assert result.streak_days == 2
        assert result.best_week == 2
        assert result.total_minutes == 50
        assert result.total_volume == 3000
        assert dict(result.weekly_frequency)["Tue"] == 1

    def test_to_dict(self, now):
        data = stats.compute_stats([], new_profile(), now).to_dict()

        assert data["total_workouts"] == 0
        assert data["streak_days"] == 0
        assert data["weekly_frequency"][0] == {"day": "Mon", "count": 0}
        assert len(data["weekly_frequency"]) == 7


class TestSessionStats:
    def test_stats_follow_history(self, app, test_user, now, bench_press):
        session = ProgressionSession(test_user["id"], clock=lambda: now)
        session.log_workout("Bench", [bench_press], duration_seconds=0)

        result = session.stats()

        assert result.total_workouts == 1
        assert result.total_xp == 48
        assert result.streak_days == 1
        assert result.total_minutes == 0
        assert result.total_volume == 1500


class TestStatsApi:
    """Tests for GET /profile/stats."""

    def test_new_user(self, auth_client):
        response = auth_client.get("/api/v1/profile/stats")

        assert response.status_code == 200
        data = response.json["data"]["stats"]
        assert data["total_workouts"] == 0
        assert data["total_xp"] == 0
        assert data["best_week"] == 0

    def test_after_workout(self, auth_client):
        auth_client.post(
            "/api/v1/workouts",
            json={
                "name": "Push day",
                "duration_seconds": 1800,
                "difficulty": "hard",
                "is_awakening": True,
                "exercises": [
                    {
                        "name": "Bench Press",
                        "sets": 3,
                        "reps": 10,
                        "weight": 50,
                        "exercise_type": "strength",
                    }
                ],
            },
        )

        data = auth_client.get("/api/v1/profile/stats").json["data"]["stats"]

        assert data["total_workouts"] == 1
        assert data["total_xp"] == 210
        assert data["streak_days"] == 1
        assert data["best_week"] == 1
        assert data["total_minutes"] == 30
        assert sum(d["count"] for d in data["weekly_frequency"]) == 1

    def test_requires_auth(self, client):
        assert client.get("/api/v1/profile/stats").status_code == 401
