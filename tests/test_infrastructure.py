"""Tests for the rate limiter, cache degradation and the HTTP envelope."""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from app import main as main_module
from app.config import settings
from app.exceptions import RateLimitError
from app.utils.cache import CacheService
from app.utils.rate_limiter import RateLimiter


def make_request(host="10.0.0.1", path="/api/quizzes"):
    return Request({
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": [],
        "client": (host, 5000),
    })


@pytest.mark.asyncio
async def test_rate_limiter_blocks_after_minute_budget():
    limiter = RateLimiter(requests_per_minute=2, requests_per_hour=100)

    await limiter.check_rate_limit(make_request())
    await limiter.check_rate_limit(make_request())

    with pytest.raises(RateLimitError) as exc:
        await limiter.check_rate_limit(make_request())
    assert exc.value.status_code == 429
    assert exc.value.retry_after == 60


@pytest.mark.asyncio
async def test_rate_limiter_tracks_clients_separately():
    limiter = RateLimiter(requests_per_minute=1, requests_per_hour=100)

    await limiter.check_rate_limit(make_request("10.0.0.1"))
    await limiter.check_rate_limit(make_request("10.0.0.2"))

    with pytest.raises(RateLimitError):
        await limiter.check_rate_limit(make_request("10.0.0.1"))


@pytest.mark.asyncio
async def test_rate_limiter_hour_budget():
    limiter = RateLimiter(requests_per_minute=100, requests_per_hour=1)

    await limiter.check_rate_limit(make_request())

    with pytest.raises(RateLimitError) as exc:
        await limiter.check_rate_limit(make_request())
    assert exc.value.retry_after == 3600


@pytest.mark.asyncio
async def test_login_has_its_own_tighter_budget():
    limiter = RateLimiter(requests_per_minute=100, requests_per_hour=100, credential_requests_per_minute=2)
    login = make_request(path="/api/auth/login")

    await limiter.check_rate_limit(login)
    await limiter.check_rate_limit(login)

    with pytest.raises(RateLimitError) as exc:
        await limiter.check_rate_limit(login)
    assert "/api/auth/login" in exc.value.message

    # the rest of the API and the other credential path are unaffected
    await limiter.check_rate_limit(make_request(path="/api/quizzes"))
    await limiter.check_rate_limit(make_request(path="/api/auth/register"))


@pytest.mark.asyncio
async def test_credential_buckets_are_per_client():
    limiter = RateLimiter(credential_requests_per_minute=1)

    await limiter.check_rate_limit(make_request("10.0.0.1", "/api/auth/login"))
    await limiter.check_rate_limit(make_request("10.0.0.2", "/api/auth/login"))

    with pytest.raises(RateLimitError):
        await limiter.check_rate_limit(make_request("10.0.0.1", "/api/auth/login/"))


def test_login_flood_gets_429_envelope(client, monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    monkeypatch.setattr(main_module, "rate_limiter", RateLimiter(credential_requests_per_minute=2))
    body = {"username": "nobody", "password": "wrong-password"}

    statuses = [client.post("/api/auth/login", json=body).status_code for _ in range(2)]
    r = client.post("/api/auth/login", json=body)

    assert statuses == [401, 401]
    assert r.status_code == 429
    assert r.headers["Retry-After"] == "60"
    assert r.json()["success"] is False
    assert r.json()["error"] == "rate_limit_exceeded"
    assert client.get("/health").status_code == 200


def test_cache_without_url_is_a_no_op():
    cache = CacheService("")

    assert cache.redis_client is None
    assert cache.get("leaderboard:10") is None
    assert cache.set("leaderboard:10", []) is False
    assert cache.clear_leaderboard_cache() is False


def test_cache_clear_removes_leaderboard_keys():
    cache = CacheService("")
    cache.redis_client = MagicMock()
    cache.redis_client.keys.return_value = ["leaderboard:5", "leaderboard:10"]

    assert cache.clear_leaderboard_cache() is True
    cache.redis_client.keys.assert_called_once_with("leaderboard:*")
    cache.redis_client.delete.assert_called_once_with("leaderboard:5", "leaderboard:10")


def test_cache_errors_are_swallowed():
    cache = CacheService("")
    cache.redis_client = MagicMock()
    cache.redis_client.get.side_effect = ConnectionError("down")

    assert cache.get("leaderboard:10") is None


def test_health(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_unknown_route_uses_failure_envelope(client):
    r = client.get("/api/does-not-exist")

    assert r.status_code == 404
    assert r.json()["success"] is False
