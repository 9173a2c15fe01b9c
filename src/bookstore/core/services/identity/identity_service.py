"""User and role persistence with password hashing."""

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select
from werkzeug.security import check_password_hash, generate_password_hash

from src.bookstore.core.errors import StoreFault
from src.bookstore.core.models.identity import IdentityError, IdentityResult
from src.bookstore.core.services.identity.password_policy import validate_password
from src.bookstore.entities.identity import RoleTable, User, UserTable
from src.bookstore.runtime.config.config_data import PasswordPolicyConfig
from src.bookstore.runtime.context import get_config


def normalize(value: str) -> str:
    return value.strip().upper()


def _to_user(row: UserTable) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        roles=sorted(role.name for role in row.roles),
    )


class IdentityService:
    """Identity store over the users, roles and user_roles tables."""

    def __init__(
        self, session: Session, policy: PasswordPolicyConfig | None = None
    ) -> None:
        self._session = session
        self._policy = policy or get_config().security.password

    def _commit(self, operation: str) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Identity store {} failed: {}", operation, e)
            raise StoreFault(f"Identity store {operation} failed") from e

    def _row_by_email(self, email: str) -> UserTable | None:
        statement = select(UserTable).where(UserTable.normalized_email == normalize(email))
        return self._session.exec(statement).first()

    def _role_by_name(self, name: str) -> RoleTable | None:
        statement = select(RoleTable).where(RoleTable.normalized_name == normalize(name))
        return self._session.exec(statement).first()

    def find_by_email(self, email: str) -> User | None:
        row = self._row_by_email(email)
        return _to_user(row) if row else None

    def find_by_username(self, username: str) -> User | None:
        statement = select(UserTable).where(
            UserTable.normalized_username == normalize(username)
        )
        row = self._session.exec(statement).first()
        return _to_user(row) if row else None

    def check_password(self, user: User, password: str) -> bool:
        row = self._session.get(UserTable, user.id)
        if row is None:
            return False
        return check_password_hash(row.password_hash, password)

    def get_roles(self, user: User) -> list[str]:
        row = self._session.get(UserTable, user.id)
        return _to_user(row).roles if row else []

    def create_user(
        self, email: str, password: str, roles: list[str] | None = None
    ) -> IdentityResult:
        """Create an identity whose username and email are both ``email``.

        The user row and its role assignments are written in one commit. Roles
        that do not exist are skipped with a warning.
        """
        errors = validate_password(password, self._policy)
        if self._row_by_email(email) is not None:
            errors.insert(
                0,
                IdentityError(
                    code="DuplicateUserName",
                    description=f"Username '{email}' is already taken.",
                ),
            )
        if errors:
            return IdentityResult(succeeded=False, errors=errors)

        role_rows = []
        for role in roles or []:
            role_row = self._role_by_name(role)
            if role_row is None:
                logger.warning("Role {} does not exist; not assigned to {}", role, email)
                continue
            role_rows.append(role_row)

        row = UserTable(
            username=email,
            normalized_username=normalize(email),
            email=email,
            normalized_email=normalize(email),
            password_hash=generate_password_hash(password),
        )
        row.roles = role_rows
        self._session.add(row)
        try:
            self._session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            self._session.rollback()
            return IdentityResult.failed(
                IdentityError(
                    code="DuplicateUserName",
                    description=f"Username '{email}' is already taken.",
                )
            )
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("Identity store create_user failed: {}", e)
            raise StoreFault("Identity store create_user failed") from e
        return IdentityResult.success()

    def ensure_role(self, name: str) -> bool:
        """Create the role if missing; True when it was created."""
        if self._role_by_name(name) is not None:
            return False
        self._session.add(RoleTable(name=name, normalized_name=normalize(name)))
        self._commit("ensure_role")
        return True

    def add_to_role(self, user: User, role: str) -> IdentityResult:
        row = self._session.get(UserTable, user.id)
        role_row = self._role_by_name(role)
        if row is None:
            return IdentityResult.failed(
                IdentityError(code="UserNotFound", description="User not found.")
            )
        if role_row is None:
            return IdentityResult.failed(
                IdentityError(code="RoleNotFound", description=f"Role {role} does not exist.")
            )
        if any(r.id == role_row.id for r in row.roles):
            return IdentityResult.failed(
                IdentityError(
                    code="UserAlreadyInRole",
                    description=f"User already in role '{role}'.",
                )
            )
        row.roles.append(role_row)
        self._session.add(row)
        self._commit("add_to_role")
        return IdentityResult.success()
