"""Generic repository over a SQLModel table."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from src.bookstore.core.errors import StoreFault

EntityT = TypeVar("EntityT", bound=BaseModel)
TableT = TypeVar("TableT", bound=SQLModel)


class SqlRepository(Generic[EntityT, TableT]):
    """Data-access layer mapping one table to one domain entity.

    Subclasses set ``entity_type`` and ``table_type``; ``load_options`` are
    applied to reads (e.g. eager loading of relationships). Every write
    commits its own transaction. Store errors roll back and surface as
    ``StoreFault``; nothing is retried.
    """

    entity_type: ClassVar[type[BaseModel]]
    table_type: ClassVar[type[SQLModel]]
    load_options: ClassVar[tuple[Any, ...]] = ()

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def _name(self) -> str:
        return self.table_type.__name__

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(
                "{} {} failed: {}",
                self._name,
                operation,
                e,
            )
            raise StoreFault(f"{self._name} {operation} failed") from e

    def _to_entity(self, row: TableT) -> EntityT:
        return self.entity_type.model_validate(row, from_attributes=True)  # type: ignore[return-value]

    def _column_values(self, entity: EntityT) -> dict[str, Any]:
        columns = set(self.table_type.model_fields) - {"id"}
        return entity.model_dump(include=columns)

    def find_all(self) -> list[EntityT]:
        """Return every row in storage (primary key) order."""
        with self._store_errors("find_all"):
            statement = (
                select(self.table_type)
                .options(*self.load_options)
                .order_by(self.table_type.id)  # type: ignore[attr-defined]
            )
            rows = self._session.exec(statement).all()
            return [self._to_entity(row) for row in rows]

    def find_by_id(self, entity_id: int) -> EntityT | None:
        """Return the entity, or None when absent."""
        with self._store_errors("find_by_id"):
            row = self._session.get(
                self.table_type, entity_id, options=list(self.load_options)
            )
            if row is None:
                return None
            return self._to_entity(row)

    def exists(self, entity_id: int) -> bool:
        with self._store_errors("exists"):
            statement = select(self.table_type.id).where(  # type: ignore[attr-defined]
                self.table_type.id == entity_id  # type: ignore[attr-defined]
            )
            return self._session.exec(statement).first() is not None

    def create(self, entity: EntityT) -> bool:
        """Insert the entity and write the assigned id back onto it."""
        with self._store_errors("create"):
            row = self.table_type(**self._column_values(entity))
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
            entity.id = row.id  # type: ignore[attr-defined]
            return row.id is not None  # type: ignore[attr-defined]

    def update(self, entity: EntityT) -> bool:
        """Overwrite the stored row with the entity's values.

        Callers check existence and id consistency beforehand; a row that
        vanished in between yields False.
        """
        with self._store_errors("update"):
            row = self._session.get(self.table_type, entity.id)  # type: ignore[attr-defined]
            if row is None:
                return False
            for name, value in self._column_values(entity).items():
                setattr(row, name, value)
            self._session.add(row)
            self._session.commit()
            return True

    def delete(self, entity: EntityT) -> bool:
        """Remove the row backing an already loaded entity."""
        with self._store_errors("delete"):
            row = self._session.get(self.table_type, entity.id)  # type: ignore[attr-defined]
            if row is None:
                return False
            self._session.delete(row)
            self._session.commit()
            return True
