"""
Tests for app.py - the local HTTP control surface.
"""

import os
import random
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from main import RoundEngine
from domain.constants import UP, P1, P2
from services.game_session import GameSession


@pytest.fixture
def session():
    engine = RoundEngine(grid_size=24, round_end_delay_ms=60_000, rng=random.Random(0))
    return GameSession(engine=engine, tick_ms=100)


@pytest.fixture
def client(session):
    app = create_app(session)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_state(client):
    response = client.get("/api/state")
    data = response.get_json()

    assert response.status_code == 200
    assert data["grid_size"] == 24
    assert data["snakes"]["p1"]["body"][0] == [4, 12]
    assert data["snakes"]["p2"]["direction"] == "LEFT"
    assert data["scores"] == {"p1": 0, "p2": 0}
    assert data["running"] is False
    assert "board" not in data


def test_state_with_board(client):
    data = client.get("/api/state?board=1").get_json()
    assert "board" in data
    assert "1" in data["board"]


def test_intent(client, session):
    response = client.post("/api/intent", json={"player": "p1", "direction": "up"})

    assert response.status_code == 200
    assert response.get_json() == {"player": "p1", "direction": "UP"}
    assert session.engine.snakes[P1].pending_direction == UP


def test_intent_invalid_direction(client):
    response = client.post("/api/intent", json={"player": "p1", "direction": "SIDEWAYS"})
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_intent_invalid_player(client):
    response = client.post("/api/intent", json={"player": "p3", "direction": "UP"})
    assert response.status_code == 400


def test_intent_missing_body(client):
    response = client.post("/api/intent")
    assert response.status_code == 400


def test_start_pause_restart(client, session):
    response = client.post("/api/start")
    assert response.get_json()["started"] is True
    assert response.get_json()["state"]["running"] is True

    assert client.post("/api/start").get_json()["started"] is False

    assert client.post("/api/pause").get_json() == {"paused": True}
    assert client.post("/api/pause").get_json() == {"paused": False}

    session.engine.scores = {P1: 4, P2: 2}
    data = client.post("/api/restart").get_json()
    assert data["state"]["scores"] == {"p1": 0, "p2": 0}
    assert data["state"]["running"] is False


def test_state_error_returns_500(client, session, monkeypatch):
    def broken_snapshot():
        raise RuntimeError("boom")

    monkeypatch.setattr(session, "snapshot", broken_snapshot)
    response = client.get("/api/state")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to read game state"}


def test_intent_non_object_body(client):
    """A JSON body that is not an object is rejected with a JSON 400."""
    response = client.post("/api/intent", json=["p1"])

    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object"}


def test_state_board_false(client):
    """board=false leaves the rendering out."""
    for value in ("false", "0", "no"):
        data = client.get(f"/api/state?board={value}").get_json()
        assert "board" not in data


def test_state_board_true_values(client):
    for value in ("true", "TRUE", "yes"):
        data = client.get(f"/api/state?board={value}").get_json()
        assert "board" in data


@pytest.mark.parametrize("path,method_name,message", [
    ("/api/start", "start", "Failed to start session"),
    ("/api/pause", "toggle_pause", "Failed to toggle pause"),
    ("/api/restart", "restart", "Failed to restart session"),
])
def test_lifecycle_error_returns_500(client, session, monkeypatch, path, method_name, message):
    def broken():
        raise RuntimeError("boom")

    monkeypatch.setattr(session, method_name, broken)
    response = client.post(path)

    assert response.status_code == 500
    assert response.get_json() == {"error": message}
