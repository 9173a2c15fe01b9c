"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.bookstore.entities._base import CatalogEntity


class AuthorRef(BaseModel):
    """Summary of the author embedded in book reads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    lastname: str | None = None


class Book(CatalogEntity):
    """Book entity representing a title in the catalog.

    ``author`` is populated on reads only; writes go through ``author_id``.
    """

    title: str = Field(description="Title")
    year: int | None = Field(default=None, description="Publication year")
    isbn: str = Field(description="ISBN")
    summary: str | None = Field(default=None, max_length=500, description="Summary")
    image: str | None = Field(default=None, description="Cover image reference")
    price: float | None = Field(default=None, description="Price")
    author_id: int | None = Field(default=None, description="Author reference")
    author: AuthorRef | None = Field(default=None, description="Referenced author")

    def __eq__(self, other: Any) -> bool:
        """Compare books by stored attributes, ignoring the embedded author."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.year == other.year
            and self.isbn == other.isbn
            and self.summary == other.summary
            and self.image == other.image
            and self.price == other.price
            and self.author_id == other.author_id
        )

    def __hash__(self) -> int:
        return hash((self.id, self.title, self.isbn, self.author_id))
