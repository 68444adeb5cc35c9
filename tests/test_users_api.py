# tests/test_users_api.py
import pytest
from fastapi.testclient import TestClient

from keymantra.services.user_service import display_name

@pytest.mark.api
class TestUserSyncAPI:
    def test_first_sync_creates_user(self, client: TestClient):
        response = client.post("/users/sync", json={
            "user_id": "user_abc", "email": "ada@example.com", "first_name": "Ada", "last_name": "Lovelace",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["created"] is True
        assert data["name"] == "Ada Lovelace"

    def test_second_sync_keeps_existing_user(self, client: TestClient):
        client.post("/users/sync", json={"user_id": "user_xyz", "email": "x@example.com"})
        response = client.post("/users/sync", json={"user_id": "user_xyz", "first_name": "Changed"})
        assert response.status_code == 200
        data = response.json()
        assert data["created"] is False
        assert data["name"] == "x"

    def test_user_id_is_required(self, client: TestClient):
        assert client.post("/users/sync", json={"email": "a@b.c"}).status_code == 422


def test_display_name_fallbacks():
    assert display_name("a@b.c", "Ada", "Lovelace") == "Ada Lovelace"
    assert display_name("a@b.c", "Ada") == "Ada"
    assert display_name("a@b.c", None, "Lovelace") == "Lovelace"
    assert display_name("a@b.c", username="ada99") == "ada99"
    assert display_name("ada@b.c") == "ada"
    assert display_name("") == "User"
