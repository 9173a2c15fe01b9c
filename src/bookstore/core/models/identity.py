from pydantic import BaseModel, Field


class IdentityError(BaseModel):
    """A single field-level failure reported by the identity store."""

    code: str
    description: str


class IdentityResult(BaseModel):
    """Outcome of an identity store write."""

    succeeded: bool
    errors: list[IdentityError] = Field(default_factory=list)

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        return cls(succeeded=False, errors=list(errors))
