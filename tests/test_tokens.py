"""Tests for password hashing, token issuance/verification and role checks."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from jose import jwt

from rental_admin.models import User
from rental_admin.utils.auth import authorize
from rental_admin.utils.passwords import hash_password, verify_password
from rental_admin.utils.tokens import create_access_token, verify_access_token

SECRET = "unit-test-secret"
DAY = 24 * 60 * 60


def _user(**overrides):
    fields = {"id": 7, "username": "admin", "role": "admin"}
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestPasswords:
    """Test bcrypt password helpers."""

    def test_hash_is_salted(self):
        first = hash_password("admin123")
        second = hash_password("admin123")
        assert first != second
        assert verify_password("admin123", first)
        assert verify_password("admin123", second)

    def test_wrong_password_rejected(self):
        assert not verify_password("admin124", hash_password("admin123"))

    def test_malformed_hash_never_matches(self):
        assert not verify_password("admin123", "not-a-bcrypt-hash")


class TestTokens:
    """Test token issuance and verification."""

    def test_round_trip_claims(self):
        token = create_access_token(_user(), SECRET, DAY)
        claims = verify_access_token(token, SECRET)

        assert claims is not None
        assert claims.user_id == 7
        assert claims.username == "admin"
        assert claims.role == "admin"

    def test_expiry_is_24_hours_after_issue(self):
        token = create_access_token(_user(), SECRET, DAY)
        claims = verify_access_token(token, SECRET)

        assert claims.expires_at - claims.issued_at == timedelta(seconds=DAY)

    def test_same_clock_and_secret_is_deterministic(self):
        now = datetime.now(timezone.utc)
        assert create_access_token(_user(), SECRET, DAY, now=now) == create_access_token(
            _user(), SECRET, DAY, now=now
        )

    def test_wrong_secret_is_invalid(self):
        token = create_access_token(_user(), "other-secret", DAY)
        assert verify_access_token(token, SECRET) is None

    def test_expired_token_is_invalid(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=25)
        token = create_access_token(_user(), SECRET, DAY, now=issued)
        assert verify_access_token(token, SECRET) is None

    def test_malformed_token_is_invalid(self):
        assert verify_access_token("not.a.token", SECRET) is None
        assert verify_access_token("", SECRET) is None

    def test_missing_claims_are_invalid(self):
        token = jwt.encode(
            {"sub": "7", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        assert verify_access_token(token, SECRET) is None


class TestAuthorize:
    """Test role checks."""

    def test_admin_permitted(self):
        assert authorize(User(id=1, username="admin", password_hash="x", role="admin"), "admin")

    def test_other_role_denied(self):
        assert not authorize(User(id=2, username="viewer", password_hash="x", role="viewer"), "admin")

    def test_missing_user_denied(self):
        assert not authorize(None, "admin")
