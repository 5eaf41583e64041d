"""
Tests for the FastAPI application.

Uses fastapi.testclient.TestClient against an app built around a service
with fake collaborators.
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.service import APIService
from ..games.stapweekend.dictionary import StaticDictionary
from ..session import SessionManager
from .conftest import FakeProvider


@pytest.fixture
def client(context, fixed_now):
    manager = SessionManager(
        provider_factory=lambda: FakeProvider(context),
        dictionary_factory=lambda: StaticDictionary(["water", "tafel"]),
    )
    service = APIService(session_manager=manager, clock=lambda: fixed_now)
    return TestClient(create_app(service))


@pytest.fixture
def session_id(client):
    response = client.post("/api/v1/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


class TestSystemEndpoints:
    """Tests for health and info endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "passgame"

    def test_root(self, client):
        response = client.get("/")
        assert response.json()["health"] == "/health"

    def test_openapi_schema_generates(self, client):
        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/v1/sessions/{session_id}/word-game/guesses" in paths
        assert "/api/v1/rules" in paths


class TestSessionEndpoints:
    """Tests for the session lifecycle over HTTP."""

    def test_rules(self, client):
        data = client.get("/api/v1/rules").json()
        assert data["count"] == 27
        assert data["rules"][13]["display"] == ["show_roman_overlay"]

    def test_create_and_get(self, client, session_id):
        data = client.get(f"/api/v1/sessions/{session_id}").json()

        assert data["session_id"] == session_id
        assert data["status"] == "playing"
        assert data["total_rules"] == 27
        assert data["api_version"] == "v1"

    def test_list_sessions(self, client, session_id):
        data = client.get("/api/v1/sessions").json()
        assert session_id in data["sessions"]
        assert data["count"] == 1

    def test_unknown_session(self, client):
        response = client.get("/api/v1/sessions/nope")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"] == {"session_id": "nope"}

    def test_end_session(self, client, session_id):
        response = client.delete(f"/api/v1/sessions/{session_id}")
        assert response.json() == {"success": True, "session_id": session_id}

        assert client.get(f"/api/v1/sessions/{session_id}").status_code == 404
        assert client.put(
            f"/api/v1/sessions/{session_id}/candidate", json={"candidate": "a"}
        ).status_code == 404


class TestGameLoopEndpoints:
    """Tests for candidate, refresh and mini-game endpoints."""

    def test_candidate(self, client, session_id):
        response = client.put(
            f"/api/v1/sessions/{session_id}/candidate", json={"candidate": "abcdefgh"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["visible_count"] == 2
        assert [r["status"] for r in data["rules"]] == ["satisfied", "failed"]

    def test_candidate_body_is_validated(self, client, session_id):
        response = client.put(f"/api/v1/sessions/{session_id}/candidate", json={})
        assert response.status_code == 422

    def test_refresh(self, client, session_id):
        response = client.post(f"/api/v1/sessions/{session_id}/refresh")
        assert response.status_code == 200
        assert response.json()["applied"] is True

    def test_winning_guess(self, client, session_id):
        response = client.post(
            f"/api/v1/sessions/{session_id}/word-game/guesses", json={"word": "water"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["won"] is True
        assert data["scores"] == ["exact"] * 5

    def test_invalid_guess(self, client, session_id):
        response = client.post(
            f"/api/v1/sessions/{session_id}/word-game/guesses", json={"word": "zzzzz"}
        )

        assert response.status_code == 422
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "INVALID_GUESS"
        assert data["board"]["word_game"]["rejection_reason"]

    def test_guess_after_round_over(self, client, session_id):
        url = f"/api/v1/sessions/{session_id}/word-game/guesses"
        client.post(url, json={"word": "water"})

        response = client.post(url, json={"word": "tafel"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "GUESS_ROUND_OVER"

    def test_guess_unknown_session(self, client):
        response = client.post("/api/v1/sessions/nope/word-game/guesses", json={"word": "water"})
        assert response.status_code == 404

    def test_entry_and_reset(self, client, session_id):
        response = client.put(
            f"/api/v1/sessions/{session_id}/word-game/entry", json={"entry": "tafels"}
        )
        assert response.json()["word_game"]["current_entry"] == "TAFEL"

        response = client.post(f"/api/v1/sessions/{session_id}/word-game/reset")
        assert response.status_code == 200
        assert response.json()["word_game"]["guesses"] == []

    def test_wordrow(self, client, session_id):
        response = client.post(f"/api/v1/sessions/{session_id}/wordrow/complete")
        assert response.status_code == 200
        assert response.json()["wordrow_completed"] is True
