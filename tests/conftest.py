"""Shared fixtures: in-memory database, API client and authenticated users."""

import os

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["REDIS_URL"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

import app.models  # noqa: F401,E402
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(fastapi_app)


def register(client, username, role="STUDENT", password="secret123"):
    """Register through the API and return (token, user json)."""
    r = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
            "role": role,
        },
    )
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    return data["token"], data["user"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def quiz_payload(title="Q1", questions=None):
    """A quiz body; by default two questions whose first option is correct."""
    if questions is None:
        questions = [
            {
                "text": "2 + 2 = ?",
                "order": 0,
                "options": [
                    {"text": "4", "isCorrect": True, "order": 0},
                    {"text": "5", "isCorrect": False, "order": 1},
                ],
            },
            {
                "text": "Capital of France?",
                "order": 1,
                "options": [
                    {"text": "Paris", "isCorrect": True, "order": 0},
                    {"text": "Rome", "isCorrect": False, "order": 1},
                    {"text": "Madrid", "isCorrect": False, "order": 2},
                ],
            },
        ]
    return {"title": title, "description": "A test quiz", "questions": questions}


@pytest.fixture
def admin(client):
    token, user = register(client, "admin1", role="ADMIN")
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture
def other_admin(client):
    token, user = register(client, "admin2", role="ADMIN")
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture
def student(client):
    token, user = register(client, "alice")
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture
def other_student(client):
    token, user = register(client, "bob")
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture
def quiz(client, admin):
    r = client.post("/api/quizzes", json=quiz_payload(), headers=admin["headers"])
    assert r.status_code == 201, r.text
    return r.json()["data"]


def correct_answers(quiz):
    """Answer every question with its correct option."""
    return [
        {
            "questionId": q["id"],
            "optionId": next(o["id"] for o in q["options"] if o["isCorrect"]),
        }
        for q in quiz["questions"]
    ]


def wrong_answers(quiz):
    return [
        {
            "questionId": q["id"],
            "optionId": next(o["id"] for o in q["options"] if not o["isCorrect"]),
        }
        for q in quiz["questions"]
    ]
