from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Verified claims of a session token."""

    subject: str = Field(description="Subject (sub), the user's email")
    token_id: str | None = Field(default=None, description="Unique token id (jti)")
    user_id: str | None = Field(default=None, description="Internal user id")
    roles: list[str] = Field(default_factory=list)
    issuer: str | None = None
    audience: list[str] = Field(default_factory=list)
    issued_at: int | None = None
    expires_at: int | None = None

    def has_role(self, role: str) -> bool:
        return role in self.roles
