"""Author data access."""

from src.bookstore.core.repositories.sql_repository import SqlRepository
from src.bookstore.entities.author.entity import Author
from src.bookstore.entities.author.table import AuthorTable


class AuthorRepository(SqlRepository[Author, AuthorTable]):
    """Data-access layer for authors."""

    entity_type = Author
    table_type = AuthorTable
