"""Entity: Author."""

from pydantic import Field

from src.bookstore.entities._base import CatalogEntity


class Author(CatalogEntity):
    """Author of one or more books in the catalog."""

    firstname: str = Field(description="Given name")
    lastname: str | None = Field(default=None, description="Family name")
    bio: str | None = Field(default=None, max_length=250, description="Short biography")
