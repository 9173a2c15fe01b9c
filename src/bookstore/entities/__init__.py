"""Entities organized by business concept.

Each entity package holds:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer

Author and Book tables reference each other, so both are imported here to
register them before the mappers are configured.
"""

from .author import Author, AuthorRepository, AuthorTable
from .book import AuthorRef, Book, BookRepository, BookTable
from .identity import RoleTable, User, UserRoleLink, UserTable

__all__ = [
    "Author",
    "AuthorRef",
    "AuthorRepository",
    "AuthorTable",
    "Book",
    "BookRepository",
    "BookTable",
    "RoleTable",
    "User",
    "UserRoleLink",
    "UserTable",
]
