"""Authentication API tests."""

from flask_jwt_extended import create_access_token


class TestLogin:
    """Tests for name-based login."""

    def test_login_creates_user(self, client):
        """First login should create the account."""
        response = client.post("/api/v1/auth/login", json={"name": "Jinwoo"})

        assert response.status_code == 200
        data = response.json
        assert data["success"] is True
        assert "token" in data["data"]
        assert data["data"]["is_new_user"] is True
        assert data["data"]["user"]["name"] == "Jinwoo"

    def test_login_returns_existing_user(self, client, test_user):
        """Login with a known name should return the same user."""
        response = client.post("/api/v1/auth/login", json={"name": "test_user"})

        assert response.status_code == 200
        data = response.json
        assert data["data"]["is_new_user"] is False
        assert data["data"]["user"]["id"] == test_user["id"]

    def test_login_strips_whitespace(self, client, test_user):
        response = client.post("/api/v1/auth/login", json={"name": "  test_user "})

        assert response.json["data"]["user"]["id"] == test_user["id"]

    def test_login_requires_name(self, client):
        """Missing or blank names are rejected."""
        for body in ({}, {"name": ""}, {"name": "   "}, {"name": 42}):
            response = client.post("/api/v1/auth/login", json=body)

            assert response.status_code == 400
            assert response.json["error"]["code"] == "VALIDATION_ERROR"

    def test_login_rejects_long_name(self, client):
        response = client.post("/api/v1/auth/login", json={"name": "x" * 300})

        assert response.status_code == 400


class TestGetCurrentUser:
    """Tests for getting current user."""

    def test_get_me_authenticated(self, auth_client):
        """Should return current user when authenticated."""
        response = auth_client.get("/api/v1/auth/me")

        assert response.status_code == 200
        data = response.json
        assert data["success"] is True
        assert data["data"]["user"]["name"] == "test_user"

    def test_get_me_unauthenticated(self, client):
        """Should return 401 when not authenticated."""
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401

    def test_get_me_unknown_user(self, app, client):
        """A valid token for a deleted user is rejected."""
        token = create_access_token(identity="424242")

        response = client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json["error"]["code"] == "UNAUTHORIZED"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json["status"] == "ok"
