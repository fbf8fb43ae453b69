"""Quest API endpoints."""

from flask import g, request

from trainingapp.api import api_bp
from trainingapp.engine.types import QuestType
from trainingapp.utils import not_found, success_response, validation_error
from trainingapp.utils.auth import user_required


@api_bp.route("/quests", methods=["GET"])
@user_required
def get_quests():
    """
    Current quests with fresh progress.

    Query params:
    - type: daily | weekly | monthly | special (optional)
    """
    quest_type = request.args.get("type")
    if quest_type is not None:
        try:
            quest_type = QuestType(quest_type)
        except ValueError:
            return validation_error({"type": f"Unknown quest type '{quest_type}'"})

    records = g.progression.quests(quest_type)
    return success_response({"quests": [q.to_dict() for q in records]})


@api_bp.route("/quests/<int:quest_id>/claim", methods=["POST"])
@user_required
def claim_quest(quest_id: int):
    """Claim a completed quest's XP reward. Claiming twice changes nothing."""
    result = g.progression.claim_quest(quest_id)
    if result is None:
        return not_found("Quest not found")

    quest, profile, claimed = result
    return success_response(
        {
            "claimed": claimed,
            "xp_earned": quest.experience_reward if claimed else 0,
            "quest": quest.to_dict(),
            "profile": profile.to_dict(),
        }
    )
