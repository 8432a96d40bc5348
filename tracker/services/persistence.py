"""
tracker/services/persistence.py

Thin persistence facade over SQLAlchemy 2.0 sessions.
Each Repository wraps one ORM model and exposes create/find/update/delete
primitives keyed by equality filters. Every write commits on its own;
there is no cross-repository transaction.
"""

from typing import Any, Generic, Iterable, Optional, TypeVar

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models import Base

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """CRUD access to one table through a caller-owned Session."""

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def _where(self, criteria: Iterable[Any], filters: dict[str, Any]) -> list[Any]:
        clauses = list(criteria)
        for column, value in filters.items():
            clauses.append(getattr(self.model, column) == value)
        return clauses

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                "repository_commit_failed",
                table=self.model.__tablename__,
                operation=operation,
                error=str(exc),
            )
            raise

    def create(self, **values: Any) -> ModelT:
        """Insert one row and return it with generated fields populated."""
        record = self.model(**values)
        self.session.add(record)
        self._commit("create")
        self.session.refresh(record)
        return record

    def create_many(self, rows: list[dict[str, Any]]) -> list[ModelT]:
        """Insert all rows in a single commit: either every row lands or none."""
        records = [self.model(**row) for row in rows]
        self.session.add_all(records)
        self._commit("create_many")
        return records

    def find(
        self,
        *criteria: Any,
        order_by: Any = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        **filters: Any,
    ) -> list[ModelT]:
        stmt = select(self.model).where(*self._where(criteria, filters))
        if order_by is not None:
            if not isinstance(order_by, (list, tuple)):
                order_by = (order_by,)
            stmt = stmt.order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt).all())

    def find_one(self, *criteria: Any, **filters: Any) -> Optional[ModelT]:
        stmt = select(self.model).where(*self._where(criteria, filters)).limit(1)
        return self.session.scalars(stmt).first()

    def count(self, *criteria: Any, **filters: Any) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(*self._where(criteria, filters))
        )
        return self.session.execute(stmt).scalar_one()

    def update_one(
        self, filters: dict[str, Any], patch: dict[str, Any]
    ) -> Optional[ModelT]:
        """Apply patch to the first matching row; None if nothing matched."""
        record = self.find_one(**filters)
        if record is None:
            return None
        for column, value in patch.items():
            setattr(record, column, value)
        self._commit("update_one")
        self.session.refresh(record)
        return record

    def update_many(self, filters: dict[str, Any], patch: dict[str, Any]) -> int:
        stmt = (
            update(self.model)
            .where(*self._where((), filters))
            .values(**patch)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        self._commit("update_many")
        return result.rowcount

    def delete_one(self, **filters: Any) -> bool:
        record = self.find_one(**filters)
        if record is None:
            return False
        self.session.delete(record)
        self._commit("delete_one")
        return True

    def delete_many(self, **filters: Any) -> int:
        stmt = delete(self.model).where(*self._where((), filters))
        result = self.session.execute(stmt)
        self._commit("delete_many")
        return result.rowcount
