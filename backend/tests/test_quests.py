"""Quest API tests."""


def find_quest(quests, title):
    return next(q for q in quests if q["title"] == title)


class TestGetQuests:
    """Tests for the quest list."""

    def test_default_catalog_is_seeded(self, auth_client):
        """A new user gets the daily and weekly quests."""
        response = auth_client.get("/api/v1/quests")

        assert response.status_code == 200
        quests = response.json["data"]["quests"]
        assert len(quests) == 6
        assert {q["quest_type"] for q in quests} == {"daily", "weekly"}
        assert all(q["current_progress"] == 0 for q in quests)

    def test_filter_by_type(self, auth_client):
        response = auth_client.get("/api/v1/quests?type=weekly")

        quests = response.json["data"]["quests"]
        assert [q["title"] for q in quests] == [
            "Weekly Warrior",
            "Strength Builder",
            "Consistency",
        ]

    def test_unknown_type(self, auth_client):
        response = auth_client.get("/api/v1/quests?type=yearly")

        assert response.status_code == 400

    def test_progress_follows_workouts(self, auth_client):
        auth_client.post(
            "/api/v1/workouts",
            json={
                "duration_seconds": 900,
                "exercises": [{"name": "Squat", "sets": 4, "reps": 5}],
            },
        )

        quests = auth_client.get("/api/v1/quests").json["data"]["quests"]

        assert find_quest(quests, "Volume Builder")["current_progress"] == 20
        assert find_quest(quests, "Endurance")["current_progress"] == 15
        assert find_quest(quests, "Endurance")["progress_percent"] == 50
        assert find_quest(quests, "Premier Entraînement")["is_completed"] is True


class TestClaimQuest:
    """Tests for claiming quest rewards."""

    def test_claim_completed_quest(self, auth_client):
        auth_client.post("/api/v1/workouts", json={"duration_seconds": 30})
        quests = auth_client.get("/api/v1/quests").json["data"]["quests"]
        first = find_quest(quests, "Premier Entraînement")

        response = auth_client.post(f"/api/v1/quests/{first['id']}/claim")

        assert response.status_code == 200
        data = response.json["data"]
        assert data["claimed"] is True
        assert data["xp_earned"] == 50
        assert data["quest"]["is_claimed"] is True
        assert data["profile"]["experience"] == 50

    def test_claim_twice(self, auth_client):
        """The second claim succeeds but pays nothing."""
        auth_client.post("/api/v1/workouts", json={"duration_seconds": 30})
        quests = auth_client.get("/api/v1/quests").json["data"]["quests"]
        first = find_quest(quests, "Premier Entraînement")

        auth_client.post(f"/api/v1/quests/{first['id']}/claim")
        response = auth_client.post(f"/api/v1/quests/{first['id']}/claim")

        data = response.json["data"]
        assert data["claimed"] is False
        assert data["xp_earned"] == 0
        assert data["profile"]["experience"] == 50

    def test_claim_unfinished_quest(self, auth_client):
        quests = auth_client.get("/api/v1/quests").json["data"]["quests"]
        weekly = find_quest(quests, "Weekly Warrior")

        response = auth_client.post(f"/api/v1/quests/{weekly['id']}/claim")

        assert response.status_code == 200
        assert response.json["data"]["claimed"] is False
        assert response.json["data"]["profile"]["experience"] == 0

    def test_claim_unknown_quest(self, auth_client):
        response = auth_client.post("/api/v1/quests/99999/claim")

        assert response.status_code == 404

    def test_cannot_claim_other_users_quest(self, client, auth_client):
        quests = auth_client.get("/api/v1/quests").json["data"]["quests"]

        login = client.post("/api/v1/auth/login", json={"name": "someone_else"})
        token = login.json["data"]["token"]
        response = client.post(
            f"/api/v1/quests/{quests[0]['id']}/claim",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 404
