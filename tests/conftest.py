"""
Shared fixtures: an app wired to a private in-memory SQLite database.
"""
import pytest
from fastapi.testclient import TestClient

from laundry_api.config import Settings
from laundry_api.main import create_app

TEST_SECRET = "test-signing-secret"


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        # Minimum bcrypt cost keeps the suite fast
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def booking_payload(**overrides) -> dict:
    payload = {
        "slotId": "slot-1",
        "machine": "M1",
        "machineType": "washer",
        "dayName": "Monday",
        "date": "2024-01-01",
        "timeSlot": "08:00-09:00",
        "timestamp": "2023-12-31T20:15:00.000Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    """Register (if needed) and log in; returns ``(token, user_id)``."""

    def _login(username: str, password: str = "pw1"):
        client.post("/register", json={"username": username, "password": password})
        resp = client.post("/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return body["token"], body["userId"]

    return _login
