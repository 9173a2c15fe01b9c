"""Identity database table models."""

from sqlmodel import Field, Relationship, SQLModel

from src.bookstore.entities._base import IdentityTable


class UserRoleLink(SQLModel, table=True):
    """Assignment of a role to a user."""

    __tablename__ = "user_roles"

    user_id: str = Field(foreign_key="users.id", primary_key=True)
    role_id: str = Field(foreign_key="roles.id", primary_key=True)


class RoleTable(IdentityTable, table=True):
    __tablename__ = "roles"

    name: str
    normalized_name: str = Field(unique=True, index=True)


class UserTable(IdentityTable, table=True):
    """Persistence model for user identities.

    Lookups go through the upper-cased ``normalized_*`` columns so that
    usernames and emails match case-insensitively.
    """

    __tablename__ = "users"

    username: str
    normalized_username: str = Field(unique=True, index=True)
    email: str
    normalized_email: str = Field(unique=True, index=True)
    password_hash: str

    roles: list[RoleTable] = Relationship(link_model=UserRoleLink)
