"""
Generic record store over one SQLAlchemy model.

Filters are plain field equality. Dotted paths address nested fields the way
the models flatten them, e.g. {"job.title": "Vendor"} -> Staff.job_title.
"""

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from zoo.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class DocumentStore(Generic[ModelT]):
    """CRUD plus compare-and-set for a single table."""

    def __init__(self, db: Session, model: type[ModelT]) -> None:
        self.db = db
        self.model = model

    def _column(self, path: str):
        name = path.replace(".", "_")
        column = getattr(self.model, name, None)
        if column is None:
            raise ValueError(f"{self.model.__name__} has no field '{path}'")
        return column

    def _where(self, filters: Optional[dict]) -> list:
        return [self._column(path) == value for path, value in (filters or {}).items()]

    def find_by_id(self, record_id: str) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def find(self, filters: Optional[dict] = None) -> list[ModelT]:
        stmt = select(self.model).where(*self._where(filters))
        return list(self.db.scalars(stmt).all())

    def count_where(self, filters: Optional[dict] = None) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._where(filters))
        return self.db.scalar(stmt) or 0

    def create(self, record: ModelT) -> ModelT:
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update_by_id(self, record_id: str, patch: dict[str, Any]) -> Optional[ModelT]:
        record = self.find_by_id(record_id)
        if record is None:
            return None
        for field, value in patch.items():
            setattr(record, self._column(field).key, value)
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete_by_id(self, record_id: str) -> bool:
        record = self.find_by_id(record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.commit()
        return True

    def delete_where(self, filters: dict[str, Any]) -> int:
        stmt = delete(self.model).where(*self._where(filters)).execution_options(synchronize_session=False)
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount

    def compare_and_set(self, record_id: str, expected: dict[str, Any], patch: dict[str, Any]) -> bool:
        """
        Apply patch only if every field in expected still holds.
        Single UPDATE ... WHERE statement; returns False when another writer got there first.
        """
        stmt = (
            update(self.model)
            .where(self.model.id == record_id, *self._where(expected))
            .values({self._column(field).key: value for field, value in patch.items()})
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount == 1
