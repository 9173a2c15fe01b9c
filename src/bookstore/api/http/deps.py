"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.core.models.claims import TokenClaims
from src.bookstore.core.services import (
    AuthService,
    IdentityService,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.bookstore.entities import AuthorRepository, BookRepository
from src.bookstore.runtime.context import get_config


def _app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to the request."""
    session = _app_dependencies(request).database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_jwt_generation_service(request: Request) -> JwtGeneratorService:
    return _app_dependencies(request).jwt_generation_service


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    return _app_dependencies(request).jwt_verify_service


def get_book_repository(db: Session = Depends(get_db_session)) -> BookRepository:
    return BookRepository(db)


def get_author_repository(db: Session = Depends(get_db_session)) -> AuthorRepository:
    return AuthorRepository(db)


def get_identity_service(db: Session = Depends(get_db_session)) -> IdentityService:
    return IdentityService(db)


def get_auth_service(
    identity: IdentityService = Depends(get_identity_service),
    jwt_generator: JwtGeneratorService = Depends(get_jwt_generation_service),
) -> AuthService:
    return AuthService(identity, jwt_generator)


async def get_current_user(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> TokenClaims:
    """Authenticate the request using its Bearer token.

    The scheme name is matched case-insensitively.
    """
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=401,
            detail="Missing Bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = jwt_verify.verify_jwt(token)

    request.state.claims = claims
    request.state.roles = set(claims.roles)
    request.state.uid = claims.user_id
    return claims


def require_role(required_role: str):
    """Create a dependency that requires a specific role for the authenticated user."""

    async def dep(claims: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if not claims.has_role(required_role):
            raise HTTPException(
                status_code=403, detail=f"Missing required role: {required_role}"
            )
        return claims

    return dep


async def require_admin(claims: TokenClaims = Depends(get_current_user)) -> TokenClaims:
    """Require the configured administrator role, resolved per request."""
    return await require_role(get_config().security.admin_role)(claims)
