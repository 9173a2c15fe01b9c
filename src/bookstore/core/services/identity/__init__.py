from .identity_service import IdentityService, normalize
from .password_policy import validate_password

__all__ = ["IdentityService", "normalize", "validate_password"]
