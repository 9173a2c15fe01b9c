"""Core models exports."""

from .claims import TokenClaims
from .identity import IdentityError, IdentityResult

__all__ = ["IdentityError", "IdentityResult", "TokenClaims"]
