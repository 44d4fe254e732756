"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.database import JsonFileBackend, StorageError  # noqa: E402
from services.events import EventStore  # noqa: E402
from services.identity import Identity, classify_auth_failure  # noqa: E402


class CountingBackend(JsonFileBackend):
    """JSON file backend that records how often it is touched."""

    def __init__(self, path: Path):
        super().__init__(path)
        self.reads = 0
        self.writes = 0

    def read(self):
        self.reads += 1
        return super().read()

    def write(self, data):
        self.writes += 1
        super().write(data)


class FailingBackend:
    """Backend whose storage is unreachable."""

    def read(self):
        raise StorageError("connection refused")

    def write(self, data):
        raise StorageError("connection refused")


class FakeVerifier:
    """
    Accepts 'good-token' and 'unverified-token'; any other token is rejected
    with a provider message containing the token text.
    """

    identities = {
        "good-token": Identity(subject_id="user-1", email="host@example.com", email_verified=True),
        "unverified-token": Identity(subject_id="user-2", email="new@example.com"),
    }

    async def verify(self, token: str) -> Identity:
        if token in self.identities:
            return self.identities[token]
        raise classify_auth_failure(Exception(f"token is {token}"))


@pytest.fixture
def backend(tmp_path):
    return CountingBackend(tmp_path / "events.json")


@pytest.fixture
def store(backend):
    return EventStore(backend)


@pytest.fixture
def failing_store():
    return EventStore(FailingBackend())


@pytest.fixture
def sample_event():
    """Sample booking payload as a client would send it."""
    return {
        "title": "Walima lunch",
        "notes": "Stage decoration by guest",
        "start": "2024-06-01T13:00:00",
        "end": "2024-06-01T16:00:00",
        "guestName": "Ayesha Khan",
        "phone": "+92 300 1234567",
        "pax": 120,
        "venue": "Grand Marquee",
        "withFood": True,
        "meal": "chicken-qorma",
        "mealItems": ["Chicken Qorma", "Vegetable pulao"],
        "type": "booking",
    }


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer good-token"}


@pytest.fixture
def app_client(store):
    """TestClient with the store and verifier swapped for test doubles."""
    from fastapi.testclient import TestClient

    from api.dependencies import get_event_store, get_identity_verifier
    from api.main import app

    app.dependency_overrides[get_event_store] = lambda: store
    app.dependency_overrides[get_identity_verifier] = lambda: FakeVerifier()
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
