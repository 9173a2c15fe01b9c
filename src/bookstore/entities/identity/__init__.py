"""Identity entities: users, roles and their assignments."""

from .entity import User
from .table import RoleTable, UserRoleLink, UserTable

__all__ = ["RoleTable", "User", "UserRoleLink", "UserTable"]
