"""Workout API endpoints."""

import math
from datetime import datetime, timezone

from flask import current_app, g, request

from trainingapp.api import api_bp
from trainingapp.engine.types import (
    ExerciseEntry,
    ScoringStrategy,
    WorkoutDifficulty,
)
from trainingapp.exceptions import InvalidInputError
from trainingapp.extensions import limiter
from trainingapp.utils import progression_error, success_response, validation_error
from trainingapp.utils.auth import user_required

MAX_HISTORY = 100

# Upper bounds for client input
MAX_SETS = 100
MAX_REPS = 1000
MAX_WEIGHT_KG = 1000
MAX_REST_SECONDS = 3600
MAX_SESSION_SECONDS = 24 * 3600


def parse_number(
    data: dict, field: str, default: float, maximum: float | None = None
) -> float:
    """JSON number (not bool, not string) as a float, optionally bounded."""
    value = data.get(field, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(field, value, "must be a number")
    try:
        number = float(value)
    except OverflowError:
        raise InvalidInputError(field, value, "must be a finite number") from None
    if not math.isfinite(number):
        raise InvalidInputError(field, value, "must be a finite number")
    if maximum is not None and number > maximum:
        raise InvalidInputError(field, value, f"must be <= {maximum}")
    return number


def parse_whole_number(
    data: dict, field: str, default: int, maximum: int | None = None
) -> int:
    """JSON number with no fractional part, e.g. 3 or 3.0 but not 2.7."""
    number = parse_number(data, field, default, maximum)
    if not number.is_integer():
        raise InvalidInputError(field, data.get(field), "must be a whole number")
    return int(number)


def parse_flag(data: dict, field: str) -> bool:
    """JSON true / false only; "false" or 0 are rejected."""
    value = data.get(field, False)
    if not isinstance(value, bool):
        raise InvalidInputError(field, value, "must be true or false")
    return value


def parse_exercises(raw) -> list[ExerciseEntry]:
    """Build exercise entries from a JSON list."""
    if not isinstance(raw, list):
        raise ValueError("exercises must be a list")

    exercises = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("name"):
            raise ValueError("every exercise needs a name")
        exercises.append(
            ExerciseEntry(
                name=str(item["name"]),
                sets=parse_whole_number(item, "sets", 1, MAX_SETS),
                reps=parse_whole_number(item, "reps", 1, MAX_REPS),
                weight=parse_number(item, "weight", 0, MAX_WEIGHT_KG),
                rest_time=parse_number(item, "rest_time", 60, MAX_REST_SECONDS),
                exercise_type=item.get("exercise_type", "strength"),
            )
        )
    return exercises

def parse_date(raw) -> datetime | None:
    """ISO date from the client, stored as naive UTC."""
    if raw is None:
        return None
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _invalid(e: Exception):
    if isinstance(e, InvalidInputError):
        return progression_error(e)
    return validation_error({"body": str(e)})


@api_bp.route("/workouts", methods=["GET"])
@user_required
def get_workouts():
    """Most recent workouts, newest first."""
    try:
        limit = int(request.args.get("limit", 20))
        limit = max(1, min(MAX_HISTORY, limit))
    except (ValueError, TypeError):
        limit = 20

    records = g.progression.workouts(limit=limit)
    return success_response({"workouts": [w.to_dict() for w in records]})


@api_bp.route("/workouts", methods=["POST"])
@limiter.limit(lambda: current_app.config["WORKOUT_RATE_LIMIT"])
@user_required
def log_workout():
    """
    Save a finished training session.

    Request body:
    {
        "name": "Push day",
        "duration_seconds": 2700,
        "difficulty": "hard",
        "is_awakening": false,
        "strategy": "simple",
        "exercises": [
            {"name": "Bench Press", "sets": 3, "reps": 10, "weight": 60,
             "exercise_type": "strength"}
        ]
    }
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return validation_error({"body": "Request body is required"})

    try:
        exercises = parse_exercises(data.get("exercises", []))
        summary = g.progression.log_workout(
            name=data.get("name", "Training Session"),
            exercises=exercises,
            duration_seconds=parse_number(
                data, "duration_seconds", 0, MAX_SESSION_SECONDS
            ),
            difficulty=WorkoutDifficulty(data.get("difficulty", "normal")),
            is_awakening=parse_flag(data, "is_awakening"),
            strategy=ScoringStrategy(data.get("strategy", "simple")),
            date=parse_date(data.get("date")),
            notes=str(data.get("notes", "")),
        )
    except (ValueError, TypeError, OverflowError) as e:
        return _invalid(e)

    return success_response(summary, status_code=201)


@api_bp.route("/workouts/preview", methods=["POST"])
@user_required
def preview_workout():
    """
    Live XP estimate for a running session.

    Request body:
    {
        "elapsed_seconds": 1500,
        "difficulty": "normal",
        "is_awakening": false,
        "exercises": [...]
    }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return validation_error({"body": "Request body must be a JSON object"})

    try:
        breakdown = g.progression.preview_live_xp(
            exercises=parse_exercises(data.get("exercises", [])),
            elapsed_seconds=parse_number(
                data, "elapsed_seconds", 0, MAX_SESSION_SECONDS
            ),
            difficulty=WorkoutDifficulty(data.get("difficulty", "normal")),
            is_awakening=parse_flag(data, "is_awakening"),
        )
    except (ValueError, TypeError, OverflowError) as e:
        return _invalid(e)

    return success_response({"preview": breakdown})
