"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from trainingapp import create_app, db
from trainingapp.engine.types import ExerciseEntry, ExerciseType
from trainingapp.models import User

# Wednesday; the Monday-based week runs 2025-06-09 .. 2025-06-15
NOW = datetime(2025, 6, 11, 15, 0)


@pytest.fixture
def app():
    """Create and configure a test application instance."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def test_user(app):
    """Create a test user in the database."""
    with app.app_context():
        user = User(name="test_user")
        db.session.add(user)
        db.session.commit()

        # Refresh to get the ID
        db.session.refresh(user)
        return {"id": user.id, "name": user.name}


@pytest.fixture
def auth_headers(client, test_user):
    """Get authorization headers with JWT token."""
    response = client.post("/api/v1/auth/login", json={"name": test_user["name"]})
    assert response.status_code == 200
    token = response.json["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_client(client, auth_headers):
    """Create an authenticated test client wrapper."""

    class AuthenticatedClient:
        def __init__(self, client, headers):
            self._client = client
            self._headers = headers

        def get(self, *args, **kwargs):
            kwargs.setdefault("headers", {}).update(self._headers)
            return self._client.get(*args, **kwargs)

        def post(self, *args, **kwargs):
            kwargs.setdefault("headers", {}).update(self._headers)
            return self._client.post(*args, **kwargs)

    return AuthenticatedClient(client, auth_headers)


@pytest.fixture
def bench_press():
    """3 x 10 @ 50kg strength exercise, worth 48 XP."""
    return ExerciseEntry(
        name="Bench Press",
        sets=3,
        reps=10,
        weight=50,
        exercise_type=ExerciseType.STRENGTH,
    )


@pytest.fixture
def now():
    """Fixed clock reading used by engine and service tests."""
    return NOW
