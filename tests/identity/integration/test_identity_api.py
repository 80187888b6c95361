"""Integration tests for the Identity API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api.routes import router
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)
    return TestClient(app)


def _register(client, external_id="auth0|001", email="jane@example.com"):
    response = client.post(
        "/users",
        json={
            "external_id": external_id,
            "username": "ironsmith",
            "email": email,
            "first_name": "Jane",
            "last_name": "Doe",
        },
    )
    assert response.status_code == 201
    return response.json()["user_id"]


class TestUserEndpoints:
    def test_register_and_find_by_subject(self, client):
        user_id = _register(client)
        body = client.get("/users/external/auth0|001").json()
        assert body["user_id"] == user_id
        assert body["status"] == "Active"

    def test_unknown_subject_is_not_found(self, client):
        assert client.get("/users/external/auth0|404").status_code == 404

    def test_duplicate_registration_is_a_bad_request(self, client):
        _register(client)
        response = client.post(
            "/users", json={"external_id": "auth0|001", "username": "other", "email": "other@example.com"}
        )
        assert response.status_code == 400

    def test_personal_info_is_hidden_by_default(self, client):
        user_id = _register(client)
        body = client.get(f"/users/{user_id}").json()
        assert body["first_name"] is None
        assert body["last_name"] is None

        client.put(f"/users/{user_id}/profile", json={"show_personal_info": True})
        body = client.get(f"/users/{user_id}").json()
        assert body["first_name"] == "Jane"

    def test_invalid_custom_url_is_a_bad_request(self, client):
        user_id = _register(client)
        response = client.put(f"/users/{user_id}/profile", json={"custom_url": "Not A Slug"})
        assert response.status_code == 400

    def test_deactivate_and_reactivate(self, client):
        user_id = _register(client)

        assert client.put(f"/users/{user_id}/deactivate", json={"reason": "Fraud"}).status_code == 200
        assert client.get(f"/users/{user_id}").json()["status"] == "Deactivated"

        assert client.put(f"/users/{user_id}/reactivate").status_code == 200
        assert client.get(f"/users/{user_id}").json()["status"] == "Active"


class TestFollowEndpoints:
    def test_follow_and_unfollow(self, client):
        jane = _register(client)
        john = _register(client, external_id="auth0|002", email="john@example.com")

        assert client.post(f"/users/{jane}/following", json={"user_id": john}).status_code == 201
        assert client.get(f"/users/{jane}/following").json()["user_ids"] == [john]
        assert client.get(f"/users/{john}/followers").json()["user_ids"] == [jane]

        assert client.delete(f"/users/{jane}/following/{john}").status_code == 200
        assert client.get(f"/users/{john}/followers").json()["user_ids"] == []

    def test_following_yourself_is_a_bad_request(self, client):
        jane = _register(client)
        assert client.post(f"/users/{jane}/following", json={"user_id": jane}).status_code == 400

    def test_unfollowing_a_stranger_is_not_found(self, client):
        jane = _register(client)
        john = _register(client, external_id="auth0|002", email="john@example.com")
        assert client.delete(f"/users/{jane}/following/{john}").status_code == 404
