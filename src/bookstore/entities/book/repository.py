"""Book data access."""

from sqlalchemy.orm import selectinload

from src.bookstore.core.repositories.sql_repository import SqlRepository
from src.bookstore.entities.book.entity import Book
from src.bookstore.entities.book.table import BookTable


class BookRepository(SqlRepository[Book, BookTable]):
    """Data-access layer for books; reads eagerly load the author."""

    entity_type = Book
    table_type = BookTable
    load_options = (selectinload(BookTable.author),)
