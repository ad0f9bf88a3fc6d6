import os
from typing import Generator

# Settings are read on import, so configure the environment first
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("MONGO_DB_NAME", "teamboard_test")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ADMIN_PASSWORD", "AdminPass123!")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from teamboard.db.database import MongoDatabase  # noqa: E402
from teamboard.main import app  # noqa: E402

PASSWORD = "Password123!"


@pytest.fixture(autouse=True)
def mongo():
    """Fresh in-memory MongoDB for every test."""
    MongoDatabase.client = AsyncMongoMockClient()
    yield MongoDatabase.client
    MongoDatabase.client = None


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    # Not used as a context manager: the startup hook would connect to a real server.
    yield TestClient(app)


def register(client, username, email, password=PASSWORD, fullname=""):
    resp = client.post(
        "/auth/register",
        json={
            "fullname": fullname,
            "username": username,
            "email": email,
            "password": password,
            "passwordConfirm": password,
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body["token"], body["data"]["user"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(client):
    token, user = register(client, "alice", "alice@example.com", fullname="Alice Doe")
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture()
def bob(client):
    token, user = register(client, "bob", "bob@example.com", fullname="Bob Roe")
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture()
def admin(client):
    token, user = register(
        client,
        "root",
        os.environ["ADMIN_EMAIL"],
        password=os.environ["ADMIN_PASSWORD"],
    )
    assert user["role"] == "adminSystem"
    return {"token": token, "user": user, "headers": auth(token)}


@pytest.fixture()
def skills(client, admin):
    for value, label in (("python", "Python"), ("react", "React"), ("mongodb", "MongoDB")):
        resp = client.post("/skills", json={"value": value, "label": label}, headers=admin["headers"])
        assert resp.status_code == 201, resp.text
    return ["python", "react", "mongodb"]
