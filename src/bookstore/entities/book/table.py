"""Book database table model."""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship

from src.bookstore.entities._base import CatalogTable

if TYPE_CHECKING:
    from src.bookstore.entities.author.table import AuthorTable


class BookTable(CatalogTable, table=True):
    """Database persistence model for books."""

    __tablename__ = "books"

    title: str
    year: int | None = None
    isbn: str
    summary: str | None = Field(default=None, max_length=500)
    image: str | None = None
    price: float | None = None
    author_id: int | None = Field(default=None, foreign_key="authors.id")

    author: Optional["AuthorTable"] = Relationship(back_populates="books")
