"""Authentication utilities."""

from functools import wraps

from flask import g
from flask_jwt_extended import get_jwt_identity, jwt_required

from trainingapp import db
from trainingapp.models.user import User
from trainingapp.utils.response import unauthorized


def user_required(fn):
    """
    Decorator that requires a valid token for an existing user.

    Puts the user on ``g.user`` and a ProgressionSession on ``g.progression``.
    """

    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        from trainingapp.services import ProgressionSession

        user_id = int(get_jwt_identity())
        user = db.session.get(User, user_id)

        if not user:
            return unauthorized("User not found")

        g.user = user
        g.progression = ProgressionSession(user.id)
        return fn(*args, **kwargs)

    return wrapper
