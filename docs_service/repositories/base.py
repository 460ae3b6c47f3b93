"""Base repository with shared get-by-id and write patterns.

Subclasses set ``model_class`` and ``not_found_error``. Writes only flush:
the service that owns the operation decides when to commit, so a history
snapshot and the mutation it guards land in one transaction.
"""

from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import DataNotFoundError

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models."""

    model_class: Type[ModelT]
    not_found_error: Type[DataNotFoundError]

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def get_by_id(self, entity_id: int) -> ModelT:
        """Get entity by primary key. Raises not_found_error if missing."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity

    def get_by_id_optional(self, entity_id: int) -> Optional[ModelT]:
        """Get entity by primary key, or None if not found."""
        return self._base_query().filter(self.model_class.id == entity_id).first()

    def save(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()
