"""JWT verification service."""

from typing import Any

from authlib.jose import JoseError, JsonWebToken
from fastapi import HTTPException
from loguru import logger

from src.bookstore.core.models.claims import TokenClaims
from src.bookstore.runtime.context import get_config


def _as_list(v: Any) -> list[str]:
    if v is None:
        return []
    return [v] if isinstance(v, str) else [str(item) for item in v]


class JwtVerificationService:
    """Verifies session tokens issued by this API."""

    def verify_jwt(self, token: str, *, key: str | None = None) -> TokenClaims:
        """Check signature, issuer, audience and temporal claims.

        Raises:
            HTTPException: 401 on any verification failure
        """
        cfg = get_config().jwt
        verification_key = key or cfg.signing_key
        if not verification_key:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        claims_options = {
            "iss": {"essential": True, "value": cfg.issuer},
            "aud": {"essential": True, "value": cfg.issuer},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }

        try:
            claims = JsonWebToken([cfg.algorithm]).decode(
                token, verification_key, claims_options=claims_options
            )
            claims.validate(leeway=cfg.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected bearer token: {}", exc)
            raise HTTPException(
                status_code=401,
                detail="Invalid or expired token",
                headers={"WWW-Authenticate": "Bearer"},
            ) from exc

        return TokenClaims(
            subject=claims["sub"],
            token_id=claims.get("jti"),
            user_id=claims.get(cfg.claims.user_id),
            roles=_as_list(claims.get(cfg.claims.roles)),
            issuer=claims.get("iss"),
            audience=_as_list(claims.get("aud")),
            issued_at=claims.get("iat"),
            expires_at=claims.get("exp"),
        )
