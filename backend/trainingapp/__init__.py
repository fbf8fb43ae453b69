"""Flask application factory."""

import os

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy

from trainingapp.config import config

db = SQLAlchemy()
jwt = JWTManager()


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)

    from trainingapp.extensions import init_sentry, limiter

    limiter.init_app(app)
    init_sentry(app)

    # CORS
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)

    from trainingapp.logging_config import setup_logging

    setup_logging(app)

    # Register blueprints
    from trainingapp.api import api_bp, register_error_handlers

    app.register_blueprint(api_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    from trainingapp.cli import quests

    app.cli.add_command(quests)

    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "ok"}

    # Shell context
    @app.shell_context_processor
    def make_shell_context():
        from trainingapp.models import (CharacterProfileRecord, QuestRecord,
                                        User, WorkoutRecord)

        return {
            "db": db,
            "User": User,
            "CharacterProfileRecord": CharacterProfileRecord,
            "WorkoutRecord": WorkoutRecord,
            "QuestRecord": QuestRecord,
        }

    return app
