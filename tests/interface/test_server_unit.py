from datetime import datetime
from unittest.mock import patch

from fastapi.testclient import TestClient

from flashy.consts import VERSION
from flashy.server import app

client = TestClient(app)

AT = "2026-03-15T12:00:00Z"


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == VERSION


def test_get_version():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": VERSION}


def test_next_review():
    response = client.post(
        "/review/next", json={"interval_days": 10, "confidence_rating": 2, "at": AT}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["interval_days"] == 26
    assert _ts(data["next_due_at"]) == _ts("2026-04-10T12:00:00Z")


def test_next_review_invalid_rating():
    response = client.post("/review/next", json={"interval_days": 10, "confidence_rating": 4})

    assert response.status_code == 400
    assert "Confidence level" in response.json()["detail"]


def test_next_review_negative_interval():
    response = client.post("/review/next", json={"interval_days": -1, "confidence_rating": 2})
    assert response.status_code == 400


def test_next_review_interval_too_large():
    response = client.post(
        "/review/next", json={"interval_days": 1_000_000, "confidence_rating": 3, "at": AT}
    )

    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


def test_next_review_missing_field():
    response = client.post("/review/next", json={"interval_days": 1})
    assert response.status_code == 422


def test_current_interval():
    response = client.post(
        "/review/interval", json={"last_reviewed_at": "2026-03-12T11:00:00Z", "at": AT}
    )
    assert response.status_code == 200
    assert response.json() == {"interval_days": 3}


def test_current_interval_new_card():
    response = client.post("/review/interval", json={})
    assert response.json() == {"interval_days": 0}


def test_session():
    cards = [
        {"id": 1, "confidence_level": 1},
        {"id": 2, "confidence_level": 3, "next_due_at": "2026-03-15T12:00:00Z"},
        {"id": 3, "next_due_at": "2026-03-16T00:00:00Z"},
    ]

    response = client.post("/session", json={"cards": cards, "seed": 4, "at": AT})

    assert response.status_code == 200
    data = response.json()
    assert data["session_id"].startswith("session_")
    assert data["total_count"] == 3
    assert data["due_count"] == 2
    assert sorted(data["card_ids"]) == [1, 2]


def test_session_limit_and_empty_deck():
    response = client.post("/session", json={"cards": [], "limit": 3})
    assert response.status_code == 200
    assert response.json()["card_ids"] == []


def test_session_invalid_confidence():
    response = client.post("/session", json={"cards": [{"id": 1, "confidence_level": 8}]})
    assert response.status_code == 400


@patch("flashy.application.scheduling.service.ReviewScheduler.build_session")
def test_session_unexpected_failure(mock_build):
    mock_build.side_effect = RuntimeError("Boom")

    response = client.post("/session", json={"cards": []})

    assert response.status_code == 500
    assert "Boom" in response.json()["detail"]
