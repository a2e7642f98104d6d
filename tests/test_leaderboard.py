"""Tests for leaderboard aggregation and the leaderboard endpoint."""

from unittest.mock import MagicMock

import pytest

from app.models import Attempt, Quiz, Role, User
from app.services.leaderboard_service import LeaderboardService
from app.utils.cache import CacheService
from conftest import correct_answers, wrong_answers


@pytest.fixture
def seed(db):
    """Insert users and scored attempts directly."""
    owner = User(username="owner", email="owner@example.com", password_hash="x", role=Role.ADMIN)
    db.add(owner)
    db.flush()
    quiz = Quiz(title="Seeded", created_by=owner.id)
    db.add(quiz)
    db.flush()

    def add(username, *results):
        user = db.query(User).filter(User.username == username).first()
        if not user:
            user = User(username=username, email=f"{username}@example.com", password_hash="x")
            db.add(user)
            db.flush()
        for score, total in results:
            db.add(Attempt(user_id=user.id, quiz_id=quiz.id, score=score, total_questions=total))
        db.commit()
        return user

    return add


def disabled_cache():
    return CacheService("")


def test_totals_and_average_percentage(db, seed):
    user = seed("u", (3, 5), (4, 4))

    board = LeaderboardService(cache=disabled_cache()).get_global_leaderboard(db)

    assert board == [{
        "user_id": str(user.id),
        "username": "u",
        "total_score": 7,
        "quizzes_attempted": 2,
        "average_percentage": 80.0,
    }]


def test_average_rounded_to_two_decimals(db, seed):
    seed("u", (1, 3), (1, 3), (2, 3))

    board = LeaderboardService(cache=disabled_cache()).get_global_leaderboard(db)

    # (33.333 + 33.333 + 66.667) / 3
    assert board[0]["average_percentage"] == 44.44


def test_sorted_by_total_score_with_username_tiebreak(db, seed):
    seed("zoe", (5, 5))
    seed("adam", (5, 10))
    seed("mia", (9, 10))
    seed("bob", (1, 1))

    board = LeaderboardService(cache=disabled_cache()).get_global_leaderboard(db)

    assert [e["username"] for e in board] == ["mia", "adam", "zoe", "bob"]


def test_limit_truncates(db, seed):
    for i in range(5):
        seed(f"user{i}", (i, 5))

    board = LeaderboardService(cache=disabled_cache()).get_global_leaderboard(db, limit=3)

    assert [e["total_score"] for e in board] == [4, 3, 2]


def test_empty_leaderboard(db):
    assert LeaderboardService(cache=disabled_cache()).get_global_leaderboard(db) == []


def test_attempts_are_read_through_the_repository(db, seed):
    user = seed("u", (2, 2))
    repository = MagicMock()
    repository.find_all_with_users.return_value = db.query(Attempt).all()

    board = LeaderboardService(attempts=repository, cache=disabled_cache()).get_global_leaderboard(db)

    repository.find_all_with_users.assert_called_once_with(db)
    assert board[0]["user_id"] == str(user.id)


def test_cached_result_is_returned_without_querying(db, seed):
    seed("u", (1, 1))
    cache = disabled_cache()
    cache.redis_client = MagicMock()
    cache.redis_client.get.return_value = '[{"user_id": "cached", "username": "c"}]'
    repository = MagicMock()

    board = LeaderboardService(attempts=repository, cache=cache).get_global_leaderboard(db, limit=5)

    assert board == [{"user_id": "cached", "username": "c"}]
    cache.redis_client.get.assert_called_once_with("leaderboard:5")
    cache.redis_client.setex.assert_not_called()
    repository.find_all_with_users.assert_not_called()


def test_cache_miss_stores_result(db, seed):
    seed("u", (1, 1))
    cache = disabled_cache()
    cache.redis_client = MagicMock()
    cache.redis_client.get.return_value = None

    LeaderboardService(cache=cache).get_global_leaderboard(db, limit=10)

    key, ttl, _ = cache.redis_client.setex.call_args.args
    assert key == "leaderboard:10"
    assert ttl == cache.default_ttl


def test_leaderboard_endpoint(client, student, other_student, quiz):
    for headers, answers in [
        (student["headers"], correct_answers(quiz)),
        (student["headers"], wrong_answers(quiz)),
        (other_student["headers"], correct_answers(quiz)),
    ]:
        client.post("/api/attempts", json={"quizId": quiz["id"], "answers": answers}, headers=headers)

    r = client.get("/api/leaderboard?limit=5", headers=student["headers"])

    assert r.status_code == 200
    board = r.json()["data"]
    # alice 2 (100%, 0%), bob 2 (100%): tie on total score, username decides
    assert [e["username"] for e in board] == ["alice", "bob"]
    assert board[0] == {
        "userId": student["user"]["id"],
        "username": "alice",
        "totalScore": 2,
        "quizzesAttempted": 2,
        "averagePercentage": 50.0,
    }


@pytest.mark.parametrize("limit", [0, 101, "abc"])
def test_leaderboard_rejects_bad_limit(client, student, limit):
    r = client.get(f"/api/leaderboard?limit={limit}", headers=student["headers"])

    assert r.status_code == 400


def test_leaderboard_requires_authentication(client):
    assert client.get("/api/leaderboard").status_code == 401
