"""API blueprints."""

from flask import Blueprint

from trainingapp.exceptions import InvalidInputError, StoreError
from trainingapp.utils import progression_error, server_error

api_bp = Blueprint("api", __name__)


def register_error_handlers(app):
    """Map engine exceptions to the JSON error envelope."""

    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(e: InvalidInputError):
        return progression_error(e)

    @app.errorhandler(StoreError)
    def handle_store_error(e: StoreError):
        return server_error("Could not save progression data")


from trainingapp.api import (  # noqa: E402, F401
    achievements,
    auth,
    profile,
    quests,
    workouts,
)
