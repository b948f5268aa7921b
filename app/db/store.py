"""Keyed record store used by the vocabulary engine services.

``DocumentStore`` is the persistence boundary of the engine. It exposes the
small set of primitives the services need (lookup, filtered query, create,
partial update with atomic increments, conditional insert) on top of a
SQLAlchemy ``Session`` and translates driver failures into the engine's
exception hierarchy:

* any ``SQLAlchemyError`` becomes ``StoreUnavailable``;
* unique-key violations and version mismatches become ``ConcurrencyConflict``.

Writes commit immediately unless they run inside ``transaction()``, in which
case the outermost block commits or rolls back everything at once.
"""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Sequence

from loguru import logger
from sqlalchemy import func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.utils.exceptions import ConcurrencyConflict, NotFoundError, StoreUnavailable


class DocumentStore:
    """Thin persistence collaborator over a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self._depth = 0

    # ------------------------------------------------------------------
    # Transaction and error plumbing
    # ------------------------------------------------------------------
    @contextmanager
    def transaction(self) -> Iterator["DocumentStore"]:
        """Group writes so that they commit or roll back together."""

        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                with self._guard("commit", "session"):
                    self.db.commit()
        except Exception:
            if self._depth == 1:
                self.db.rollback()
            raise
        finally:
            self._depth -= 1

    @contextmanager
    def _guard(self, operation: str, target: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            logger.warning(
                "Conflicting write rejected by store",
                operation=operation,
                target=target,
                error=str(exc.orig),
            )
            raise ConcurrencyConflict(
                f"Conflicting write on {target}",
                details={"operation": operation},
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(
                "Store operation failed",
                operation=operation,
                target=target,
                error=str(exc),
            )
            raise StoreUnavailable(
                f"Store operation '{operation}' on {target} failed",
                details={"operation": operation},
            ) from exc

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_one(self, model: type, *criteria: Any) -> Any | None:
        """Return the first record matching ``criteria`` or ``None``."""

        stmt = (
            select(model)
            .where(*criteria)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        with self._guard("get_one", model.__tablename__):
            return self.db.scalars(stmt).first()

    def query(
        self,
        model: type,
        *criteria: Any,
        order_by: Sequence[Any] = (),
        limit: int | None = None,
    ) -> list[Any]:
        """Return all records matching ``criteria`` in the requested order."""

        stmt = select(model).where(*criteria).execution_options(populate_existing=True)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._guard("query", model.__tablename__):
            return list(self.db.scalars(stmt))

    def count(self, model: type, *criteria: Any) -> int:
        """Return the number of records matching ``criteria``."""

        stmt = select(func.count()).select_from(model).where(*criteria)
        with self._guard("count", model.__tablename__):
            return int(self.db.scalar(stmt) or 0)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, record: Any) -> uuid.UUID | str:
        """Insert ``record`` and return its primary key."""

        table = record.__tablename__
        with self.transaction(), self._guard("create", table):
            self.db.add(record)
            self.db.flush([record])
            return record.id

    def update(
        self,
        model: type,
        record_id: Any,
        fields: Mapping[str, Any],
        *,
        increment: Mapping[str, int | float] | None = None,
        expected_version: int | None = None,
    ) -> None:
        """Apply a partial update to one record.

        Fields named in ``increment`` are written as ``column = column + amount``
        in the same statement. When ``expected_version`` is given the update
        only applies if the stored ``version`` still matches, and the version is
        bumped as part of the write.
        """

        values: dict[str, Any] = dict(fields)
        for field, amount in (increment or {}).items():
            values[field] = getattr(model, field) + amount

        stmt = update(model).where(model.id == record_id)
        if expected_version is not None:
            stmt = stmt.where(model.version == expected_version)
            values["version"] = model.version + 1
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        table = model.__tablename__
        with self.transaction():
            with self._guard("update", table):
                result = self.db.execute(stmt)
            if result.rowcount == 0:
                if expected_version is not None:
                    raise ConcurrencyConflict(
                        f"{table} record {record_id} was modified concurrently",
                        details={"expected_version": expected_version},
                    )
                raise NotFoundError(f"{table} record {record_id} does not exist")

    def increment(self, model: type, record_id: Any, field: str, amount: int | float) -> bool:
        """Atomically add ``amount`` to ``field``; return ``False`` if the record is missing."""

        stmt = (
            update(model)
            .where(model.id == record_id)
            .values({field: getattr(model, field) + amount})
            .execution_options(synchronize_session=False)
        )
        with self.transaction(), self._guard("increment", model.__tablename__):
            result = self.db.execute(stmt)
        return result.rowcount > 0

    def insert_if_absent(
        self, model: type, values: Mapping[str, Any], *, keys: Iterable[str]
    ) -> bool:
        """Insert a row unless one already exists for the unique ``keys``.

        Returns ``True`` when this call created the row.
        """

        table = model.__table__
        index_elements = list(keys)
        dialect = self.db.get_bind().dialect.name

        with self.transaction(), self._guard("insert_if_absent", model.__tablename__):
            if dialect in ("postgresql", "sqlite"):
                dialect_insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
                stmt = (
                    dialect_insert(table)
                    .values(**values)
                    .on_conflict_do_nothing(index_elements=index_elements)
                )
                result = self.db.execute(stmt)
                return result.rowcount > 0

            try:
                with self.db.begin_nested():
                    self.db.execute(insert(table).values(**values))
            except IntegrityError:
                return False
            return True


__all__ = ["DocumentStore"]
