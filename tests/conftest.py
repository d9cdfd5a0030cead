"""Shared fixtures: apps wired to an in-memory database, with and without role gates."""

import os

# Never reach a real cluster from tests
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret")
os.environ.setdefault("APP_ENV", "development")

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from tests.fake_mongo import FakeDatabase


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def settings():
    return Settings(token_secret="test-secret", environment="development", auth_enabled=False)


@pytest.fixture
def client(db, settings):
    with TestClient(create_app(settings, db)) as c:
        yield c


@pytest.fixture
def auth_settings(settings):
    return settings.model_copy(update={"auth_enabled": True})


@pytest.fixture
def auth_client(db, auth_settings):
    with TestClient(create_app(auth_settings, db)) as c:
        yield c


@pytest.fixture
def seed_user(db):
    def _seed(email, role):
        db["users"].docs.append({"email": email, "role": role})
    return _seed


@pytest.fixture
def login(auth_client):
    """Issue a token cookie for ``email`` on the auth-enabled client."""
    def _login(email):
        res = auth_client.post("/jwt", json={"email": email})
        assert res.status_code == 200
        return auth_client
    return _login
