"""Unit tests for session token generation and verification."""

import time

import pytest
from authlib.jose import jwt as authlib_jwt
from fastapi import HTTPException

from src.bookstore.core.services.jwt import JwtGeneratorService, JwtVerificationService
from src.bookstore.entities.identity import User
from tests.fixtures.core import TEST_SIGNING_KEY


@pytest.fixture
def user() -> User:
    return User(
        id="3f2c1a9e-0000-4000-8000-000000000001",
        username="reader@bookstore.com",
        email="reader@bookstore.com",
        roles=["Customer"],
    )


class TestJwtGeneratorService:
    """Test token generation."""

    def test_session_token_claims(self, active_config, user: User):
        """Should carry subject, id, roles and a five minute lifetime."""
        token = JwtGeneratorService().generate_session_token(user)

        claims = authlib_jwt.decode(token, TEST_SIGNING_KEY)

        assert claims["sub"] == user.email
        assert claims["nameid"] == user.id
        assert claims["role"] == ["Customer"]
        assert claims["iss"] == "bookstore-api"
        assert claims["aud"] == "bookstore-api"
        assert claims["exp"] - claims["iat"] == 300
        assert claims["jti"]

    def test_each_token_has_unique_jti(self, active_config, user: User):
        generator = JwtGeneratorService()

        first = authlib_jwt.decode(generator.generate_session_token(user), TEST_SIGNING_KEY)
        second = authlib_jwt.decode(generator.generate_session_token(user), TEST_SIGNING_KEY)

        assert first["jti"] != second["jti"]

    def test_registered_claims_cannot_be_overridden(self, active_config):
        token = JwtGeneratorService().generate_jwt(
            subject="reader@bookstore.com",
            claims={"sub": "someone-else", "exp": 1, "scope": "catalog"},
            now=1_700_000_000,
        )

        claims = authlib_jwt.decode(token, TEST_SIGNING_KEY)

        assert claims["sub"] == "reader@bookstore.com"
        assert claims["exp"] == 1_700_000_300
        assert claims["scope"] == "catalog"

    def test_custom_claim_names(self, active_config, user: User):
        active_config.jwt.claims.user_id = "uid"
        active_config.jwt.claims.roles = "roles"

        token = JwtGeneratorService().generate_session_token(user)
        claims = authlib_jwt.decode(token, TEST_SIGNING_KEY)

        assert claims["uid"] == user.id
        assert claims["roles"] == ["Customer"]


class TestJwtVerificationService:
    """Test token verification."""

    def test_round_trip(self, active_config, user: User):
        token = JwtGeneratorService().generate_session_token(user)

        claims = JwtVerificationService().verify_jwt(token)

        assert claims.subject == user.email
        assert claims.user_id == user.id
        assert claims.roles == ["Customer"]
        assert claims.expires_at - claims.issued_at == 300
        assert claims.has_role("Customer")
        assert not claims.has_role("Administrator")

    def test_expired_token_rejected(self, active_config, user: User):
        issued_long_ago = int(time.time()) - 3600
        token = JwtGeneratorService().generate_session_token(user, now=issued_long_ago)

        with pytest.raises(HTTPException) as exc_info:
            JwtVerificationService().verify_jwt(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_clock_skew_tolerates_recent_expiry(self, active_config, user: User):
        active_config.jwt.clock_skew = 120
        issued = int(time.time()) - 360
        token = JwtGeneratorService().generate_session_token(user, now=issued)

        claims = JwtVerificationService().verify_jwt(token)

        assert claims.subject == user.email

    def test_wrong_key_rejected(self, active_config, user: User):
        token = JwtGeneratorService().generate_jwt(
            subject=user.email, secret="a-different-signing-key-0123456789abcdef"
        )

        with pytest.raises(HTTPException) as exc_info:
            JwtVerificationService().verify_jwt(token)

        assert exc_info.value.status_code == 401

    def test_wrong_issuer_rejected(self, active_config, user: User):
        token = JwtGeneratorService().generate_jwt(
            subject=user.email, issuer="someone-else"
        )

        with pytest.raises(HTTPException) as exc_info:
            JwtVerificationService().verify_jwt(token)

        assert exc_info.value.status_code == 401

    def test_garbage_rejected(self, active_config):
        with pytest.raises(HTTPException) as exc_info:
            JwtVerificationService().verify_jwt("not-a-token")

        assert exc_info.value.status_code == 401
