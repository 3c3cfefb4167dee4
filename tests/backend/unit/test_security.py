"""
Unit tests for core.security module.
Tests password hashing, session token creation and verification.
"""
import datetime as dt

import jwt
import pytest

from contactbook.core.errors import Forbidden, Unauthorized
from contactbook.core.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALG,
    JWT_SECRET,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
    verify_token,
)


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_different_hash_each_time(self):
        """Password hashing should produce different hashes (salt included)."""
        password = "TestPassword123"
        assert hash_password(password) != hash_password(password)

    def test_hash_is_not_plain_text(self):
        password = "TestPassword123"
        hashed = hash_password(password)
        assert isinstance(hashed, str)
        assert hashed != password
        assert password not in hashed

    def test_verify_password_correct_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("TestPassword123", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False


class TestSessionTokens:
    """Tests for token issuing and verification."""

    def test_token_carries_identity_claims(self):
        token = create_access_token("user-123", "alice", "admin")
        payload = decode_access_token(token)
        assert payload["sub"] == "user-123"
        assert payload["username"] == "alice"
        assert payload["role"] == "admin"

    def test_token_expires_after_configured_window(self):
        token = create_access_token("user-exp", "bob", "user")
        payload = decode_access_token(token)
        assert payload["exp"] - payload["iat"] == ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def test_default_window_is_one_day(self):
        assert ACCESS_TOKEN_EXPIRE_MINUTES == 24 * 60

    def test_verify_token_missing(self):
        with pytest.raises(Unauthorized) as exc:
            verify_token(None)
        assert exc.value.status_code == 401
        assert exc.value.detail["message"] == "missing"

    def test_verify_token_garbage(self):
        with pytest.raises(Forbidden) as exc:
            verify_token("invalid.token.here")
        assert exc.value.status_code == 403
        assert exc.value.detail["message"] == "invalid_or_expired"

    def test_verify_token_expired(self):
        past = dt.datetime.now(dt.timezone.utc) - dt.timedelta(hours=25)
        token = jwt.encode(
            {"sub": "u1", "username": "carol", "role": "user", "iat": past, "exp": past + dt.timedelta(hours=24)},
            JWT_SECRET,
            algorithm=JWT_ALG,
        )
        with pytest.raises(Forbidden):
            verify_token(token)

    def test_verify_token_wrong_secret(self):
        now = dt.datetime.now(dt.timezone.utc)
        token = jwt.encode(
            {"sub": "u1", "username": "carol", "role": "admin", "exp": now + dt.timedelta(hours=1)},
            "some-other-secret",
            algorithm=JWT_ALG,
        )
        with pytest.raises(Forbidden):
            verify_token(token)

    def test_verify_token_rejects_unknown_role(self):
        now = dt.datetime.now(dt.timezone.utc)
        token = jwt.encode(
            {"sub": "u1", "username": "carol", "role": "root", "exp": now + dt.timedelta(hours=1)},
            JWT_SECRET,
            algorithm=JWT_ALG,
        )
        with pytest.raises(Forbidden):
            verify_token(token)

    def test_verify_token_requires_username_claim(self):
        now = dt.datetime.now(dt.timezone.utc)
        token = jwt.encode({"sub": "u1", "role": "user", "exp": now + dt.timedelta(hours=1)},
                           JWT_SECRET, algorithm=JWT_ALG)
        with pytest.raises(Forbidden):
            verify_token(token)
