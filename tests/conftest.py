"""
Shared fixtures.

Password hashing runs with a low work factor so the suite stays fast.
"""

import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("BOOKSHARE_PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("BOOKSHARE_SENTRY_DSN", "")

import pytest
from fastapi.testclient import TestClient

from bookshare.api.app import app
from bookshare.api.books import get_now
from bookshare.config import get_settings
from bookshare.storage import create_local_storage

get_settings.cache_clear()


class Clock:
    """Mutable request clock."""

    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **delta):
        self.now = self.now + timedelta(**delta)


@pytest.fixture
def clock():
    return Clock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def client(clock):
    """A TestClient with a fresh store and a controllable clock."""
    app.dependency_overrides[get_now] = lambda: clock.now
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def storage():
    return create_local_storage()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email="reader@example.com", username="reader", password="secret"):
    return client.post(
        "/register", json={"username": username, "email": email, "password": password},
    )


@pytest.fixture
def reader_token(client):
    """Token of a registered VIEW_ALL user."""
    return register(client).json()["token"]


@pytest.fixture
def creator_token(client):
    """Token of a user seeded with the CREATOR role."""
    client.post(
        "/addUser",
        json={
            "email": "creator@example.com",
            "username": "creator",
            "password": "secret",
            "roles": ["VIEW_ALL", "CREATOR"],
        },
    )
    response = client.post(
        "/login", json={"email": "creator@example.com", "password": "secret"},
    )
    return response.json()["token"]
