"""Request and response transfer objects.

JSON field names are camelCase on the wire (``authorId``); snake_case
names are accepted on input too.
"""

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


class TransferObject(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Authors ---


class AuthorDTO(TransferObject):
    id: int
    firstname: str
    lastname: str | None = None
    bio: str | None = None


class AuthorCreateDTO(TransferObject):
    firstname: str = Field(min_length=1)
    lastname: str | None = None
    bio: str | None = Field(default=None, max_length=250)


class AuthorUpdateDTO(AuthorCreateDTO):
    id: int


# --- Books ---


class BookAuthorDTO(TransferObject):
    id: int
    firstname: str
    lastname: str | None = None


class BookDTO(TransferObject):
    id: int
    title: str
    year: int | None = None
    isbn: str
    summary: str | None = None
    image: str | None = None
    price: float | None = None
    author_id: int | None = None
    author: BookAuthorDTO | None = None


class BookCreateDTO(TransferObject):
    title: str = Field(min_length=1)
    year: int | None = None
    isbn: str = Field(min_length=1)
    summary: str | None = Field(default=None, max_length=500)
    image: str | None = None
    price: float | None = Field(default=None, ge=0)
    author_id: int | None = None


class BookUpdateDTO(BookCreateDTO):
    id: int


# --- Users ---


class LoginRequest(TransferObject):
    email_address: EmailStr = Field(
        validation_alias=AliasChoices("emailAddress", "email_address", "email"),
    )
    password: str = Field(min_length=1)


class RegisterRequest(LoginRequest):
    confirm_password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("confirmPassword", "confirm_password"),
    )

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("The password and confirm password do not match.")
        return self


class TokenResponse(BaseModel):
    token: str


class RegistrationResponse(BaseModel):
    succeeded: bool
