"""Achievement API endpoints."""

from flask import g

from trainingapp.api import api_bp
from trainingapp.utils import success_response
from trainingapp.utils.auth import user_required


@api_bp.route("/achievements", methods=["GET"])
@user_required
def get_achievements():
    """All achievements, unlocking any whose threshold was reached."""
    achievements = g.progression.achievements()
    return success_response(
        {
            "achievements": achievements,
            "unlocked_count": sum(1 for a in achievements if a["is_unlocked"]),
            "total_count": len(achievements),
        }
    )
