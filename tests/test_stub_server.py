"""Tests for the in-memory stub service itself."""

import uuid

import pytest
from fastapi.testclient import TestClient

from skills_client.testing import SkillStore, create_app

AUTH = {"Authorization": "Bearer test-token", "X-API-Key": "test-api-key"}


class TestSkillStore:
    """Test SkillStore directly."""

    def test_create_and_get(self):
        store = SkillStore()
        skill = store.create("Python", "scripting")

        assert store.get(skill.id) == skill
        assert store.get(uuid.uuid4()) is None

    def test_update_unknown(self):
        assert SkillStore().update(uuid.uuid4(), "x", "y") is None

    def test_delete_clears_assignments(self):
        store = SkillStore()
        skill = store.create("SQL", "")
        category_id = uuid.uuid4()
        store.assign_category(skill.id, category_id)
        store.assign_user(skill.id, "user-1")
        store.associate(skill.id, uuid.uuid4())

        assert store.delete(skill.id)
        assert not store.delete(skill.id)
        assert store.by_category(category_id) == []
        assert store.by_user("user-1") == []
        assert store.project_ids(skill.id) == []

    def test_associate_unknown_skill(self):
        store = SkillStore()
        assert not store.associate(uuid.uuid4(), uuid.uuid4())
        assert not store.disassociate(uuid.uuid4(), uuid.uuid4())

    def test_popular_limit(self):
        store = SkillStore()
        for name in ("a", "b", "c"):
            store.create(name, "")

        assert len(store.popular(2)) == 2
        assert store.popular(0) == []
        assert store.popular(-1) == []

    def test_search_is_case_insensitive(self):
        store = SkillStore()
        skill = store.create("FastAPI", "Web APIs")

        assert store.search("fastapi") == [skill]
        assert store.search("web") == [skill]


class TestStubApp:
    """Test the HTTP surface of the stub."""

    @pytest.fixture
    def http(self):
        with TestClient(create_app(token="test-token", api_key="test-api-key")) as http:
            yield http

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer test-token"},
            {"X-API-Key": "test-api-key"},
            {"Authorization": "test-token", "X-API-Key": "test-api-key"},
        ],
    )
    def test_missing_credentials(self, http, headers):
        response = http.get("/skills", headers=headers)
        assert response.status_code == 401

    def test_any_credentials_when_unconfigured(self):
        with TestClient(create_app()) as http:
            response = http.get("/skills", headers={"Authorization": "Bearer a", "X-API-Key": "b"})
        assert response.status_code == 200
        assert response.json() == []

    def test_create_returns_201(self, http):
        response = http.post("/skills", json={"name": "Go"}, headers=AUTH)

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"id", "name", "description", "created_at", "updated_at"}
        assert body["description"] == ""

    def test_patch_rejects_mismatched_id(self, http):
        skill_id = http.post("/skills", json={"name": "Go"}, headers=AUTH).json()["id"]

        response = http.patch(
            f"/skills/{skill_id}",
            json={"id": str(uuid.uuid4()), "name": "Rust"},
            headers=AUTH,
        )

        assert response.status_code == 400

    def test_invalid_uuid(self, http):
        response = http.get("/skills/not-a-uuid", headers=AUTH)
        assert response.status_code == 422
