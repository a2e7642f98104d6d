"""Tests for registration, login and token verification."""

import asyncio
import time

import bcrypt
import httpx
import jwt
import pytest

from app.exceptions import ConflictError, UnauthorizedError
from app.main import app as fastapi_app
from app.models import Role
from app.services.auth_service import AuthService
from conftest import auth, register


def test_register_then_login_yields_same_identity(client):
    _, user = register(client, "carol", role="ADMIN")

    r = client.post("/api/auth/login", json={"username": "carol", "password": "secret123"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    claims = jwt.decode(body["data"]["token"], "test-secret-key", algorithms=["HS256"])
    assert claims["id"] == user["id"]
    assert claims["role"] == "ADMIN"
    assert claims["username"] == "carol"
    assert claims["email"] == "carol@example.com"
    assert "exp" in claims


def test_register_hides_password_and_defaults_to_student(client):
    r = client.post(
        "/api/auth/register",
        json={"username": "dave", "email": "dave@example.com", "password": "secret123"},
    )

    assert r.status_code == 201
    user = r.json()["data"]["user"]
    assert user["role"] == "STUDENT"
    assert "password" not in user
    assert "passwordHash" not in user


def test_register_duplicate_email_conflicts(client):
    client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": "secret123"},
    )

    r = client.post(
        "/api/auth/register",
        json={"username": "alice2", "email": "alice@x.com", "password": "secret123"},
    )

    assert r.status_code == 409
    assert r.json() == {
        "success": False,
        "message": "Email already registered",
        "error": "conflict",
    }


def test_register_duplicate_username_conflicts(client):
    register(client, "alice")

    r = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "other@example.com", "password": "secret123"},
    )

    assert r.status_code == 409
    assert r.json()["message"] == "Username already taken"


def test_register_rejects_short_password(client):
    r = client.post(
        "/api/auth/register",
        json={"username": "erin", "email": "erin@example.com", "password": "123"},
    )

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "validation_error"
    assert "password" in body["message"]


@pytest.mark.parametrize("username,password", [("alice", "wrong-pass"), ("nobody", "secret123")])
def test_login_with_bad_credentials_is_unauthorized(client, username, password):
    register(client, "alice")

    r = client.post("/api/auth/login", json={"username": username, "password": password})

    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_me_returns_current_user(client, student):
    r = client.get("/api/auth/me", headers=student["headers"])

    assert r.status_code == 200
    assert r.json()["data"]["id"] == student["user"]["id"]
    assert r.json()["data"]["username"] == "alice"


def test_me_without_token_is_unauthorized(client):
    r = client.get("/api/auth/me")

    assert r.status_code == 401
    assert r.json()["message"] == "No token provided"


def test_me_with_tampered_token_is_unauthorized(client, student):
    r = client.get("/api/auth/me", headers=auth(student["token"] + "x"))

    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_token_signed_with_other_secret_is_rejected(client, student):
    forged = jwt.encode(
        {"id": student["user"]["id"], "username": "alice", "email": "a@b.com", "role": "ADMIN"},
        "not-the-secret",
        algorithm="HS256",
    )

    r = client.get("/api/attempts", headers=auth(forged))

    assert r.status_code == 401


def test_logout_acknowledges(client):
    r = client.post("/api/auth/logout")

    assert r.status_code == 200
    assert r.json()["success"] is True


class TestAuthService:
    """Credential service used directly, without HTTP."""

    @pytest.fixture
    def service(self):
        return AuthService(secret="unit-secret", bcrypt_rounds=4)

    def test_password_hash_is_salted_and_verifiable(self, service):
        first = service.hash_password("hunter22")
        second = service.hash_password("hunter22")

        assert first != second
        assert service.verify_password("hunter22", first)
        assert not service.verify_password("hunter23", first)

    def test_register_and_verify_token(self, service, db):
        token, user = service.register(db, "frank", "frank@example.com", "secret123", Role.ADMIN)

        current = service.verify_token(token)

        assert current.id == user.id
        assert current.role == Role.ADMIN
        assert user.password_hash != "secret123"

    def test_register_conflict(self, service, db):
        service.register(db, "frank", "frank@example.com", "secret123")

        with pytest.raises(ConflictError, match="Email already registered"):
            service.register(db, "frank2", "frank@example.com", "secret123")

    def test_expired_token_is_rejected(self, db):
        service = AuthService(secret="unit-secret", expires_minutes=-1, bcrypt_rounds=4)
        token, _ = service.register(db, "gina", "gina@example.com", "secret123")

        with pytest.raises(UnauthorizedError, match="Invalid or expired token"):
            service.verify_token(token)

    def test_token_with_missing_claims_is_rejected(self, service):
        token = jwt.encode({"id": "not-a-uuid"}, "unit-secret", algorithm="HS256")

        with pytest.raises(UnauthorizedError):
            service.verify_token(token)


@pytest.mark.asyncio
async def test_password_check_does_not_block_other_requests(student, monkeypatch):
    checkpw = bcrypt.checkpw

    def slow_checkpw(password, hashed):
        time.sleep(0.5)
        return checkpw(password, hashed)

    monkeypatch.setattr(bcrypt, "checkpw", slow_checkpw)
    finished = {}
    transport = httpx.ASGITransport(app=fastapi_app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        async def call(name, method, url, **kwargs):
            response = await ac.request(method, url, **kwargs)
            finished[name] = time.perf_counter()
            return response

        started = time.perf_counter()
        login = asyncio.create_task(call(
            "login", "POST", "/api/auth/login",
            json={"username": "alice", "password": "secret123"},
        ))
        await asyncio.sleep(0.05)
        health = await call("health", "GET", "/health")
        login_response = await login

    assert health.status_code == 200
    assert login_response.status_code == 200
    assert finished["health"] < finished["login"]
    assert finished["health"] - started < 0.4
