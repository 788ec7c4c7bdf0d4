"""Tests for session tokens and password hashing."""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from greenworld.core.security import (
    TOKEN_ALGORITHM,
    TokenService,
    hash_password,
    verify_password,
)
from greenworld.db.enums import Role


SECRET = "unit-test-secret"


def _user(**overrides):
    values = {"id": 7, "email": "ngo@example.com", "role": Role.NGO}
    values.update(overrides)
    return SimpleNamespace(**values)


def _raw_token(payload: dict, secret: str = SECRET) -> str:
    now = datetime.now(timezone.utc)
    claims = {"iat": now, "exp": now + timedelta(days=1)}
    claims.update(payload)
    return jwt.encode(claims, secret, algorithm=TOKEN_ALGORITHM)


class TestTokenService:
    def test_issue_then_verify_returns_claims(self):
        service = TokenService(SECRET)
        claims = service.verify(service.issue(_user()))

        assert claims is not None
        assert claims.id == 7
        assert claims.email == "ngo@example.com"
        assert claims.role == Role.NGO

    def test_role_stored_as_plain_string_is_accepted(self):
        service = TokenService(SECRET)
        claims = service.verify(service.issue(_user(role="admin")))
        assert claims.role == Role.ADMIN

    def test_token_is_valid_for_configured_days(self):
        service = TokenService(SECRET, expires_days=7)
        payload = jwt.decode(service.issue(_user()), SECRET, algorithms=[TOKEN_ALGORITHM])
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600

    def test_wrong_secret_is_rejected(self):
        token = TokenService("other-secret").issue(_user())
        assert TokenService(SECRET).verify(token) is None

    def test_tampered_token_is_rejected(self):
        token = TokenService(SECRET).issue(_user())
        head, body, signature = token.split(".")
        tampered = f"{head}.{body}.{signature[::-1]}"
        assert TokenService(SECRET).verify(tampered) is None

    def test_expired_token_is_rejected(self):
        token = TokenService(SECRET, expires_days=-1).issue(_user())
        assert TokenService(SECRET).verify(token) is None

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "Bearer xyz"])
    def test_malformed_input_returns_none(self, garbage):
        assert TokenService(SECRET).verify(garbage) is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "x@example.com", "role": "ngo"},
            {"id": "7", "email": "x@example.com", "role": "ngo"},
            {"id": True, "email": "x@example.com", "role": "ngo"},
            {"id": 7, "role": "ngo"},
            {"id": 7, "email": "x@example.com", "role": "superuser"},
        ],
    )
    def test_missing_or_invalid_claims_return_none(self, payload):
        assert TokenService(SECRET).verify(_raw_token(payload)) is None

    def test_missing_expiry_is_rejected(self):
        token = jwt.encode(
            {"id": 7, "email": "x@example.com", "role": "ngo"}, SECRET, algorithm=TOKEN_ALGORITHM
        )
        assert TokenService(SECRET).verify(token) is None

    def test_empty_secret_is_refused(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert verify_password("password123", hashed)

    def test_wrong_password_fails(self):
        hashed = hash_password("password123")
        assert not verify_password("password124", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_non_bcrypt_hash_fails_without_raising(self):
        assert verify_password("password123", "plain-text") is False
