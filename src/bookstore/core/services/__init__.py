"""Core services exports."""

from .auth_service import AuthService
from .database import DbManageService, DbSessionService
from .identity import IdentityService
from .jwt import JwtGeneratorService, JwtVerificationService

__all__ = [
    "AuthService",
    "DbManageService",
    "DbSessionService",
    "IdentityService",
    "JwtGeneratorService",
    "JwtVerificationService",
]
