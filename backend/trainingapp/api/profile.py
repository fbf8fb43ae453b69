"""Character profile API endpoints."""

from flask import g

from trainingapp.api import api_bp
from trainingapp.engine.leveling import TITLE_BANDS
from trainingapp.utils import success_response
from trainingapp.utils.auth import user_required


@api_bp.route("/profile", methods=["GET"])
@user_required
def get_profile():
    """Get the current user's character."""
    profile = g.progression.profile()
    return success_response({"profile": profile.to_dict()})


@api_bp.route("/profile/titles", methods=["GET"])
@user_required
def get_titles():
    """Title bands, for the progression preview screen."""
    return success_response(
        {
            "titles": [
                {"from_level": first, "to_level": last, "title": title}
                for first, last, title in TITLE_BANDS
            ]
        }
    )


@api_bp.route("/profile/stats", methods=["GET"])
@user_required
def get_stats():
    """Totals, streak, best week and this week's workouts per day."""
    stats = g.progression.stats()
    return success_response({"stats": stats.to_dict()})


@api_bp.route("/profile/reset", methods=["POST"])
@user_required
def reset_profile():
    """
    Reset all progression: character, workout history, quests and achievements.

    The default quest catalog is seeded again.
    """
    profile = g.progression.reset()
    quests = g.progression.store.load_quests()
    return success_response(
        {
            "profile": profile.to_dict(),
            "quests": [q.to_dict() for q in quests],
        },
        message="Progression reset",
    )
