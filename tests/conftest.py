# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Environment is set before importing tweeteroo, because
# tweeteroo.core.config builds its settings at import time.
# Every test gets a fresh in-memory SQLite store wired in through
# app.dependency_overrides[get_db].
# =============================================================================

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tweeteroo.database import Base, get_db, init_db
from tweeteroo.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    """A registered user with an avatar."""
    response = client.post(
        "/sign-up",
        json={"username": "alice", "avatar": "https://img.example.com/alice.png"},
    )
    assert response.status_code == 201
    return "alice"


@pytest.fixture
def post_tweet(client):
    """Post a tweet and return its _id as listed by GET /tweets."""

    def _post(username: str, text: str) -> str:
        response = client.post("/tweets", json={"username": username, "tweet": text})
        assert response.status_code == 201
        return client.get("/tweets").json()[0]["_id"]

    return _post
