"""End-to-end tests for the HTTP surface.

The app is wired to the test container, so every HTTP request starts from
empty in-memory repositories.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from opaq.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by in-memory repositories."""
    return TestClient(create_app(build_test_container(for_app=True)))


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"


class TestAuthentication:
    """Mutations without a valid session cookie are rejected with 401."""

    def test_submit_interaction_requires_auth(self, client):
        response = client.post(
            "/interactions",
            json={"post_id": str(uuid4()), "action": "like", "value": True},
        )

        assert response.status_code == 401

    def test_invalid_cookie_is_anonymous(self, client):
        client.cookies.set("auth_token", "not-a-jwt")

        response = client.post(
            "/interactions", json={"post_id": str(uuid4()), "action": "view"}
        )

        assert response.status_code == 401

    def test_user_history_requires_auth(self, client):
        response = client.get("/interactions/me")

        assert response.status_code == 401

    def test_create_discussion_requires_auth(self, client):
        response = client.post(
            "/discussions", json={"post_id": str(uuid4()), "content": "Hello"}
        )

        assert response.status_code == 401

    def test_delete_discussion_requires_auth(self, client):
        response = client.delete(f"/discussions/{uuid4()}")

        assert response.status_code == 401

    def test_discussion_like_requires_auth(self, client):
        response = client.post(
            "/discussion-interactions",
            json={"discussion_id": str(uuid4()), "action": "like", "value": True},
        )

        assert response.status_code == 401

    def test_discussion_like_without_value_requires_auth(self, client):
        response = client.post(
            "/discussion-interactions",
            json={"discussion_id": str(uuid4()), "action": "like"},
        )

        assert response.status_code == 401

    def test_pitch_like_requires_auth(self, client):
        response = client.post(f"/pitches/{uuid4()}/like")

        assert response.status_code == 401

    def test_my_pitches_require_auth(self, client):
        response = client.get("/pitches", params={"mine_only": True})

        assert response.status_code == 401


class TestValidation:
    """Malformed requests are rejected with 422."""

    def test_unknown_action(self, client):
        response = client.post(
            "/interactions", json={"post_id": str(uuid4()), "action": "share"}
        )

        assert response.status_code == 422

    def test_malformed_post_id(self, client):
        response = client.get("/interactions", params={"post_id": "not-a-uuid"})

        assert response.status_code == 422

    def test_unknown_sort(self, client):
        response = client.get(
            "/discussions", params={"post_id": str(uuid4()), "sort": "hot"}
        )

        assert response.status_code == 422

    def test_pitch_limit_upper_bound(self, client):
        response = client.get("/pitches", params={"limit": 101})

        assert response.status_code == 422


class TestNotFound:
    """Unknown targets are reported as 404 without their identifier."""

    def test_stats_for_unknown_post(self, client):
        response = client.get("/interactions", params={"post_id": str(uuid4())})

        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found"

    def test_discussions_for_unknown_post(self, client):
        response = client.get("/discussions", params={"post_id": str(uuid4())})

        assert response.status_code == 404

    def test_unknown_pitch(self, client):
        response = client.get(f"/pitches/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Pitch not found"


class TestAnonymousReads:
    """Reads that need no session."""

    def test_discussion_like_state_unknown_discussion(self, client):
        response = client.get(
            "/discussion-interactions", params={"discussion_id": str(uuid4())}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Discussion not found"

    def test_empty_pitch_listing(self, client):
        response = client.get("/pitches")

        assert response.status_code == 200
        data = response.json()
        assert data["pitches"] == []
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 0, "pages": 0}
