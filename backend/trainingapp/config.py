"""Application configuration."""

import os
from datetime import timedelta


class Config:
    """Base configuration."""

    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///trainingapp.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    # JWT
    JWT_SECRET_KEY = os.environ.get(
        "JWT_SECRET_KEY", "jwt-secret-key-change-in-production"
    )
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=30)

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")

    # Rate limiting
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    WORKOUT_RATE_LIMIT = os.environ.get("WORKOUT_RATE_LIMIT", "30 per hour")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "")  # empty: DEBUG in debug mode, else INFO
    LOG_JSON = os.environ.get("LOG_JSON", "").lower() in ("1", "true", "yes")

    # Error tracking
    SENTRY_DSN = os.environ.get("SENTRY_DSN", "")

    # Quest periods: day/week boundaries are taken in this zone
    QUEST_TIMEZONE = os.environ.get("QUEST_TIMEZONE", "UTC")
    QUEST_WEEK_START = int(os.environ.get("QUEST_WEEK_START", "0"))  # 0 = Monday


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_JSON = False


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_JSON = True


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}  # SQLite doesn't need pool settings
    RATELIMIT_ENABLED = False
    JWT_SECRET_KEY = "testing-jwt-secret-key-at-least-32-bytes"


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
