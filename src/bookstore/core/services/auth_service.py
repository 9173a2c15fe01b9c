"""Credential authentication, session token issuance and registration."""

from src.bookstore.core.errors import AuthenticationError
from src.bookstore.core.models.identity import IdentityResult
from src.bookstore.core.services.identity import IdentityService
from src.bookstore.core.services.jwt import JwtGeneratorService
from src.bookstore.entities.identity import User
from src.bookstore.runtime.context import get_config


class AuthService:
    """Validates credentials against the identity store and issues tokens.

    Users log in with their email address. Registration stores the email as
    the username too, so both lookups agree for every registered account.
    """

    def __init__(
        self, identity: IdentityService, jwt_generator: JwtGeneratorService
    ) -> None:
        self._identity = identity
        self._jwt_generator = jwt_generator

    def authenticate(self, identifier: str, password: str) -> User:
        """Return the user owning these credentials.

        Raises:
            AuthenticationError: unknown identifier or wrong password
        """
        user = self._identity.find_by_email(identifier)
        if user is None or not self._identity.check_password(user, password):
            raise AuthenticationError()
        return user

    def issue_token(self, user: User) -> str:
        """Sign a session token carrying the user's current roles."""
        user = user.model_copy(update={"roles": self._identity.get_roles(user)})
        return self._jwt_generator.generate_session_token(user)

    def register(self, identifier: str, password: str) -> IdentityResult:
        """Create the account together with the configured default role."""
        default_role = get_config().security.default_role
        roles = [default_role] if default_role else []
        return self._identity.create_user(identifier, password, roles=roles)
