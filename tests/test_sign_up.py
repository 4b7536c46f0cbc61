# =============================================================================
# tests/test_sign_up.py - POST /sign-up
# =============================================================================

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from tweeteroo.database import get_db
from tweeteroo.main import app
from tweeteroo.models.user import User
from tweeteroo.services.stores import UserStore, get_user_store


class TestSignUp:

    def test_creates_user(self, client, db_session):
        response = client.post(
            "/sign-up", json={"username": "a", "avatar": "https://x/y.png"}
        )

        assert response.status_code == 201
        user = db_session.execute(select(User).where(User.username == "a")).scalar_one()
        assert user.avatar == "https://x/y.png"

    def test_avatar_is_stored_verbatim(self, client, db_session):
        client.post("/sign-up", json={"username": "b", "avatar": "https://example.com"})

        user = db_session.execute(select(User).where(User.username == "b")).scalar_one()
        assert user.avatar == "https://example.com"

    def test_duplicate_username_conflicts(self, client, db_session):
        body = {"username": "a", "avatar": "https://x/y.png"}
        assert client.post("/sign-up", json=body).status_code == 201

        response = client.post(
            "/sign-up", json={"username": "a", "avatar": "https://other/z.png"}
        )

        assert response.status_code == 409
        assert response.json() == {"message": "Username already exists"}
        count = db_session.execute(select(func.count()).select_from(User)).scalar_one()
        assert count == 1

    @pytest.mark.parametrize(
        "avatar", ["not a url", "", "x/y.png", "https://x/y z.png", "https://x/y\tz.png", "https://x/<y>.png"]
    )
    def test_invalid_avatar_rejected(self, client, avatar):
        response = client.post("/sign-up", json={"username": "a", "avatar": avatar})

        assert response.status_code == 422
        assert "avatar" in response.json()["message"]

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"avatar": "https://x/y.png"},
            {"username": "a"},
            {"username": "", "avatar": "https://x/y.png"},
            {"username": 5, "avatar": "https://x/y.png"},
            {"username": "a", "avatar": "https://x/y.png", "extra": True},
        ],
    )
    def test_malformed_body_rejected(self, client, db_session, body):
        response = client.post("/sign-up", json=body)

        assert response.status_code == 422
        assert response.json()["errors"]
        count = db_session.execute(select(func.count()).select_from(User)).scalar_one()
        assert count == 0

    def test_store_failure_is_500(self):
        class BrokenStore:
            def exists(self, username):
                raise OperationalError("SELECT", {}, Exception("database is down"))

        app.dependency_overrides[get_user_store] = lambda: BrokenStore()
        try:
            client = TestClient(app, raise_server_exceptions=False)
            response = client.post(
                "/sign-up", json={"username": "a", "avatar": "https://x/y.png"}
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    def test_store_failure_keeps_cors_headers(self):
        class BrokenStore:
            def exists(self, username):
                raise OperationalError("SELECT", {}, Exception("database is down"))

        app.dependency_overrides[get_user_store] = lambda: BrokenStore()
        try:
            client = TestClient(app, raise_server_exceptions=False)
            response = client.post(
                "/sign-up",
                json={"username": "a", "avatar": "https://x/y.png"},
                headers={"Origin": "https://somewhere.example"},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"

    def test_invalid_avatar_message(self, client):
        response = client.post("/sign-up", json={"username": "a", "avatar": "https://x/y z.png"})

        assert response.json()["message"] == '"avatar" must be a valid uri'

    def test_concurrent_duplicate_hits_unique_constraint(self, client, db_session):
        # a sign-up that passed the existence check before the other one committed
        class RacingStore(UserStore):
            def exists(self, username):
                return False

        def racing_store(db=Depends(get_db)):
            return RacingStore(db)

        body = {"username": "a", "avatar": "https://x/y.png"}
        assert client.post("/sign-up", json=body).status_code == 201

        app.dependency_overrides[get_user_store] = racing_store
        try:
            response = client.post("/sign-up", json=body)
        finally:
            del app.dependency_overrides[get_user_store]

        assert response.status_code == 409
        assert response.json() == {"message": "Username already exists"}
        count = db_session.execute(select(func.count()).select_from(User)).scalar_one()
        assert count == 1
