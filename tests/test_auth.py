"""Tests for login, token verification and the auth guard."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from sqlmodel import Session

from rental_admin.models import User
from rental_admin.utils.tokens import create_access_token, verify_access_token

from helpers import TEST_SECRET, bearer, create_user, login


class TestLogin:
    """Test POST /auth/login."""

    def test_seeded_admin_can_log_in(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "admin123"})

        assert response.status_code == 200
        body = response.json()
        assert body["token"]
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 24 * 60 * 60
        assert body["user"]["username"] == "admin"
        assert body["user"]["role"] == "admin"
        assert "password_hash" not in body["user"]

    def test_token_claims_match_user(self, client):
        body = client.post("/auth/login", json={"username": "admin", "password": "admin123"}).json()
        claims = verify_access_token(body["token"], TEST_SECRET)

        assert claims.user_id == body["user"]["id"]
        assert claims.username == "admin"
        assert claims.role == "admin"

    def test_wrong_password(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_user(self, client):
        response = client.post("/auth/login", json={"username": "ghost", "password": "admin123"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_missing_fields(self, client):
        for payload in ({}, {"username": "admin"}, {"password": "admin123"}, {"username": "", "password": ""}):
            response = client.post("/auth/login", json=payload)
            assert response.status_code == 400
            assert response.json() == {"error": "Username and password are required"}

    def test_non_json_body(self, client):
        response = client.post("/auth/login", content="username=admin", headers={"Content-Type": "text/plain"})

        assert response.status_code == 400
        assert "error" in response.json()


class TestVerify:
    """Test GET /auth/verify and the guard behind it."""

    def test_valid_token_returns_user(self, client):
        response = client.get("/auth/verify", headers=bearer(login(client)))

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["username"] == "admin"
        assert user["role"] == "admin"

    def test_missing_header(self, client):
        response = client.get("/auth/verify")

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_malformed_header(self, client):
        token = login(client)
        response = client.get("/auth/verify", headers={"Authorization": f"Token {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_garbage_token(self, client):
        response = client.get("/auth/verify", headers=bearer("garbage"))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_token_signed_with_other_secret(self, client):
        token = create_access_token(
            SimpleNamespace(id=1, username="admin", role="admin"), "another-secret", 3600
        )
        response = client.get("/auth/verify", headers=bearer(token))

        assert response.status_code == 401

    def test_expired_token(self, client):
        token = create_access_token(
            SimpleNamespace(id=1, username="admin", role="admin"),
            TEST_SECRET,
            3600,
            now=datetime.now(timezone.utc) - timedelta(hours=2),
        )
        response = client.get("/auth/verify", headers=bearer(token))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_deleted_user_token_rejected(self, client, engine):
        user_id = create_user(engine, "temp", "temp-pass", "admin")
        token = login(client, "temp", "temp-pass")

        with Session(engine) as session:
            session.delete(session.get(User, user_id))
            session.commit()

        response = client.get("/auth/verify", headers=bearer(token))
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_role_reread_from_store(self, client, engine):
        user_id = create_user(engine, "moderator", "mod-pass", "admin")
        token = login(client, "moderator", "mod-pass")

        with Session(engine) as session:
            user = session.get(User, user_id)
            user.role = "viewer"
            session.add(user)
            session.commit()

        response = client.get("/auth/verify", headers=bearer(token))
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "viewer"
