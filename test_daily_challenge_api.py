import jwt
import pytest
from fastapi.testclient import TestClient

import main as main_module
from dependencies import ALGORITHM, SECRET_KEY, get_db
from db.models import DailyChallengeAttempt, UserChallengeStats


def _token(user_id: str) -> dict:
    token = jwt.encode({"sub": user_id}, SECRET_KEY, algorithm=ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    main_module.app.dependency_overrides[get_db] = override_get_db
    with TestClient(main_module.app) as test_client:
        yield test_client
    main_module.app.dependency_overrides.clear()


def _create(client, **overrides):
    body = {"challenge_date": "2025-01-01", "word": "apple"}
    body.update(overrides)
    response = client.post("/daily-challenge/challenges", json=body)
    assert response.status_code == 201, response.text
    return response.json()["challenge"]


def test_create_challenge_applies_defaults(client):
    challenge = _create(client, hint="A fruit")
    assert challenge["language"] == "en"
    assert challenge["difficulty"] == "medium"
    assert challenge["is_active"] is True
    assert challenge["hint"] == "A fruit"


def test_update_challenge(client):
    challenge = _create(client)

    response = client.patch(f"/daily-challenge/challenges/{challenge['id']}", json={"difficulty": "hard"})
    assert response.status_code == 200
    assert response.json()["challenge"]["difficulty"] == "hard"

    # No changed fields: the challenge comes back untouched
    response = client.patch(f"/daily-challenge/challenges/{challenge['id']}", json={})
    assert response.status_code == 200
    assert response.json()["challenge"]["difficulty"] == "hard"


def test_update_missing_challenge_is_404(client):
    response = client.patch("/daily-challenge/challenges/404", json={"word": "pear"})
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_active_challenge_lookup(client):
    _create(client, challenge_date="2025-01-01", language="en", word="apple")
    _create(client, challenge_date="2025-01-01", language="es", word="manzana")
    _create(client, challenge_date="2025-01-02", word="pear", is_active=False)

    response = client.get("/daily-challenge/active", params={"challenge_date": "2025-01-01", "language": "es"})
    assert response.status_code == 200
    assert response.json()["challenge"]["word"] == "manzana"

    response = client.get("/daily-challenge/active", params={"challenge_date": "2025-01-01"})
    assert response.json()["challenge"]["word"] == "apple"

    response = client.get("/daily-challenge/active", params={"challenge_date": "2025-01-02"})
    assert response.status_code == 404

    response = client.get("/daily-challenge/active")
    assert response.status_code == 422
    assert response.json()["kind"] == "validation"


def test_attempt_requires_identity(client, count_rows):
    challenge = _create(client)
    response = client.post("/daily-challenge/attempts", json={"challenge_id": challenge["id"], "guess": "apple"})
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthorized"
    assert count_rows(DailyChallengeAttempt) == 0


def test_invalid_token_is_rejected(client):
    response = client.get("/daily-challenge/stats/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_three_day_scenario_over_http(client):
    headers = _token("user-1")
    days = [
        _create(client, challenge_date="2025-01-01"),
        _create(client, challenge_date="2025-01-02"),
        _create(client, challenge_date="2025-01-03"),
    ]
    expected = [
        {"total_played": 1, "total_solved": 1, "current_streak": 1, "best_streak": 1,
         "last_played_date": "2025-01-01", "last_solved_date": "2025-01-01"},
        {"total_played": 2, "total_solved": 1, "current_streak": 0, "best_streak": 1,
         "last_played_date": "2025-01-02", "last_solved_date": "2025-01-01"},
        {"total_played": 3, "total_solved": 2, "current_streak": 1, "best_streak": 1,
         "last_played_date": "2025-01-03", "last_solved_date": "2025-01-03"},
    ]

    for challenge, correct, want in zip(days, [True, False, True], expected):
        response = client.post(
            "/daily-challenge/attempts",
            json={"challenge_id": challenge["id"], "guess": "apple", "is_correct": correct},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        attempt = response.json()["attempt"]
        assert attempt["user_id"] == "user-1"
        assert attempt["is_correct"] is correct

        stats = client.get("/daily-challenge/stats/me", headers=headers).json()["stats"]
        for key, value in want.items():
            assert stats[key] == value


def test_inactive_challenge_attempt_is_404_without_writes(client, count_rows):
    challenge = _create(client, is_active=False)
    response = client.post(
        "/daily-challenge/attempts",
        json={"challenge_id": challenge["id"], "guess": "apple", "is_correct": True},
        headers=_token("user-2"),
    )
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"
    assert count_rows(DailyChallengeAttempt) == 0
    assert count_rows(UserChallengeStats) == 0


def test_empty_guess_is_a_validation_error(client, count_rows):
    challenge = _create(client)
    response = client.post(
        "/daily-challenge/attempts",
        json={"challenge_id": challenge["id"], "guess": ""},
        headers=_token("user-3"),
    )
    assert response.status_code == 422
    assert response.json()["kind"] == "validation"
    assert count_rows(DailyChallengeAttempt) == 0


def test_list_attempts_and_empty_stats(client):
    headers = _token("user-4")
    assert client.get("/daily-challenge/stats/me", headers=headers).json() == {"stats": None}

    first = _create(client, challenge_date="2025-01-01")
    second = _create(client, challenge_date="2025-01-02")
    for challenge, n in [(first, 1), (first, 2), (second, 1)]:
        client.post(
            "/daily-challenge/attempts",
            json={"challenge_id": challenge["id"], "guess": "guess", "attempt_number": n},
            headers=headers,
        )

    attempts = client.get("/daily-challenge/attempts", headers=headers).json()["attempts"]
    assert len(attempts) == 3

    attempts = client.get(
        "/daily-challenge/attempts", params={"challenge_id": first["id"]}, headers=headers
    ).json()["attempts"]
    assert [a["attempt_number"] for a in attempts] == [1, 2]

    assert client.get("/daily-challenge/attempts", headers=_token("someone-else")).json() == {"attempts": []}


def test_health_live(client):
    assert client.get("/health/live").json() == {"status": "ok"}
    assert client.get("/health/ready").json() == {"status": "ok"}


def test_get_challenge_by_id(client):
    challenge = _create(client, word="plum", hint="Purple")

    response = client.get(f"/daily-challenge/challenges/{challenge['id']}")
    assert response.status_code == 200
    assert response.json()["challenge"]["word"] == "plum"
    assert response.json()["challenge"]["hint"] == "Purple"

    response = client.get("/daily-challenge/challenges/9999")
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"
