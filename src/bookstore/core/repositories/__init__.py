"""Generic data-access layer."""

from .sql_repository import SqlRepository

__all__ = ["SqlRepository"]
