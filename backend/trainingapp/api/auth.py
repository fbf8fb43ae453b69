"""Authentication API endpoints."""

import logging

from flask import g, request
from flask_jwt_extended import create_access_token

from trainingapp import db
from trainingapp.api import api_bp
from trainingapp.models import User
from trainingapp.utils import success_response, validation_error
from trainingapp.utils.auth import user_required

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


@api_bp.route("/auth/login", methods=["POST"])
def login():
    """
    Log in as a hunter, creating the account on first use.

    Request body:
    {
        "name": "Jinwoo"
    }
    """
    data = request.get_json(silent=True) or {}

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        return validation_error({"name": "name is required"})

    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        return validation_error({"name": f"name is limited to {MAX_NAME_LENGTH} chars"})

    user = User.query.filter_by(name=name).first()
    is_new_user = user is None

    if is_new_user:
        user = User(name=name)
        db.session.add(user)
        db.session.commit()
        logger.info(f"New user registered: {user.id}")

    access_token = create_access_token(identity=str(user.id))

    return success_response(
        {"user": user.to_dict(), "token": access_token, "is_new_user": is_new_user}
    )


@api_bp.route("/auth/me", methods=["GET"])
@user_required
def get_current_user():
    """Get current authenticated user."""
    return success_response({"user": g.user.to_dict()})
