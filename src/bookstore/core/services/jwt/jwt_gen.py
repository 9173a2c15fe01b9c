import time
import uuid
from typing import Any

from authlib.jose import JoseError, JsonWebToken
from fastapi import HTTPException
from loguru import logger

from src.bookstore.entities.identity import User
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config

_REGISTERED_CLAIMS = frozenset({"iss", "sub", "aud", "exp", "iat", "nbf", "jti"})


class JwtGeneratorService:
    """Service for generating signed session tokens."""

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        issuer: str | None = None,
        audience: str | list[str] | None = None,
        include_jti: bool = True,
        secret: str | None = None,
        now: int | None = None,
    ) -> str:
        """Generate a signed JWT.

        Args:
            subject: Subject (sub) claim
            claims: Additional claims; registered claim names are ignored
            expires_in_seconds: Token lifetime (defaults to config)
            issuer: Issuer (iss) claim (defaults to config issuer)
            audience: Audience (aud) claim (defaults to the issuer)
            include_jti: Whether to include a unique JWT ID claim
            secret: Signing key (defaults to config signing key)
            now: Issuance time as epoch seconds (defaults to the current time)

        Returns:
            Signed JWT token string

        Raises:
            HTTPException: If the signing key is missing or encoding fails
        """
        config: ConfigData = get_config()
        jwt_config = config.jwt

        issuer = issuer or jwt_config.issuer
        secret = secret or jwt_config.signing_key
        if not secret:
            raise HTTPException(
                status_code=500, detail="JWT signing secret not configured"
            )
        if expires_in_seconds is None:
            expires_in_seconds = jwt_config.expires_in_seconds

        issued_at = int(time.time()) if now is None else now

        payload: dict[str, Any] = {
            "iss": issuer,
            "sub": subject,
            "aud": audience or issuer,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": issued_at + expires_in_seconds,
        }

        if include_jti:
            payload["jti"] = str(uuid.uuid4())

        if claims:
            payload.update(
                {k: v for k, v in claims.items() if k not in _REGISTERED_CLAIMS}
            )

        try:
            header = {"alg": jwt_config.algorithm, "typ": "JWT"}
            token = JsonWebToken([jwt_config.algorithm]).encode(header, payload, secret)
        except JoseError as e:
            logger.error("JWT encoding failed: {}", e)
            raise HTTPException(status_code=500, detail="JWT encoding failed") from e

        return token.decode() if isinstance(token, bytes) else token

    def generate_session_token(self, user: User, now: int | None = None) -> str:
        """Issue the session token for an authenticated user.

        Claims: ``sub`` is the email, ``jti`` a fresh UUID, the configured
        user-id claim carries the internal id and the configured roles claim
        lists every assigned role.
        """
        claim_names = get_config().jwt.claims
        claims = {
            claim_names.user_id: user.id,
            claim_names.roles: list(user.roles),
        }
        return self.generate_jwt(subject=user.email, claims=claims, now=now)
