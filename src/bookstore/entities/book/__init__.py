"""Entity package: Book."""

from .entity import AuthorRef, Book
from .repository import BookRepository
from .table import BookTable

__all__ = ["AuthorRef", "Book", "BookRepository", "BookTable"]
