"""Password rules applied at registration."""

from src.bookstore.core.models.identity import IdentityError
from src.bookstore.runtime.config.config_data import PasswordPolicyConfig


def validate_password(password: str, policy: PasswordPolicyConfig) -> list[IdentityError]:
    """Return every rule the password breaks, empty when it is acceptable."""
    errors: list[IdentityError] = []

    if len(password) < policy.min_length:
        errors.append(
            IdentityError(
                code="PasswordTooShort",
                description=f"Passwords must be at least {policy.min_length} characters.",
            )
        )
    if policy.max_length is not None and len(password) > policy.max_length:
        errors.append(
            IdentityError(
                code="PasswordTooLong",
                description=f"Passwords must be at most {policy.max_length} characters.",
            )
        )
    if policy.require_digit and not any(c.isdigit() for c in password):
        errors.append(
            IdentityError(
                code="PasswordRequiresDigit",
                description="Passwords must have at least one digit ('0'-'9').",
            )
        )
    if policy.require_lowercase and not any(c.islower() for c in password):
        errors.append(
            IdentityError(
                code="PasswordRequiresLower",
                description="Passwords must have at least one lowercase ('a'-'z').",
            )
        )
    if policy.require_uppercase and not any(c.isupper() for c in password):
        errors.append(
            IdentityError(
                code="PasswordRequiresUpper",
                description="Passwords must have at least one uppercase ('A'-'Z').",
            )
        )
    if policy.require_non_alphanumeric and password.isalnum():
        errors.append(
            IdentityError(
                code="PasswordRequiresNonAlphanumeric",
                description="Passwords must have at least one non alphanumeric character.",
            )
        )

    return errors
