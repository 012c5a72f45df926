"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from flask_jwt_extended import create_access_token  # noqa: E402

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    REDIS_URL = None
    RATELIMIT_STORAGE_URI = "memory://"


def build_app(**overrides) -> Flask:
    """Create an application with ``overrides`` applied to the test config."""

    class TestConfig(_BaseTestConfig):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
    return application


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = build_app()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_factory() -> Callable[..., Flask]:
    """Build applications with config overrides, dropping their tables after."""

    created: list[Flask] = []

    def _factory(**overrides) -> Flask:
        application = build_app(**overrides)
        created.append(application)
        return application

    yield _factory

    for application in created:
        with application.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def db_session(app: Flask):
    """Push an application context and expose the scoped session."""

    with app.app_context():
        yield db.session


@pytest.fixture()
def make_user(app: Flask) -> Callable[..., int]:
    """Return a factory that persists a user and returns its id."""

    def _make_user(
        email: str,
        role: str = "event_manager",
        *,
        password: str = "Password123",
        verified: bool = False,
        created_at: datetime | None = None,
    ) -> int:
        with app.app_context():
            user = User(email=email, role=role, is_verified=verified)
            user.set_password(password)
            if created_at is not None:
                user.created_at = created_at
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture()
def auth_headers(app: Flask) -> Callable[[int], dict[str, str]]:
    """Return a helper that builds bearer headers for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        with app.app_context():
            token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


class FakeRedis:
    """In-memory stand-in for the subset of the redis client the cache uses."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, key):
        self.ttls.pop(key, None)
        return 1 if self.store.pop(key, None) is not None else 0


@pytest.fixture()
def fake_redis(app: Flask, monkeypatch) -> FakeRedis:
    """Route the application cache to an in-memory fake."""

    from extensions import cache

    fake = FakeRedis()
    monkeypatch.setattr(cache, "_client", fake)
    return fake
