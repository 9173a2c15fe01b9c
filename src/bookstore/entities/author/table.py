"""Author database table model."""

from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from src.bookstore.entities._base import CatalogTable

if TYPE_CHECKING:
    from src.bookstore.entities.book.table import BookTable


class AuthorTable(CatalogTable, table=True):
    """Database persistence model for authors."""

    __tablename__ = "authors"

    firstname: str
    lastname: str | None = None
    bio: str | None = Field(default=None, max_length=250)

    books: list["BookTable"] = Relationship(back_populates="author")
