"""User domain entity."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """An authenticated identity with its assigned role names.

    The password hash stays in the identity store and is never carried here.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Internal user id")
    username: str = Field(description="Login name, equal to the email on registration")
    email: str = Field(description="Email address")
    roles: list[str] = Field(default_factory=list, description="Assigned role names")

    def has_role(self, role: str) -> bool:
        return role in self.roles
