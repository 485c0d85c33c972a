"""Model-generic repository shared by every admin resource."""

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from cms_admin.core.conditions import Condition, MatchKind, Predicate
from cms_admin.db.exceptions import (
    ConnectionError,
    ConstraintViolationError,
    DatabaseError,
    DuplicateRecordError,
)
from cms_admin.db.models import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _clause(model: type[Base], predicate: Predicate) -> ColumnElement[bool]:
    column = getattr(model, predicate.column)
    if predicate.match is MatchKind.CONTAINS:
        return column.like(f"%{predicate.value}%")
    return column == predicate.value


def _ordering(model: type[Base], condition: Condition) -> Iterator[ColumnElement[Any]]:
    for column_name, direction in condition.order_by:
        column = getattr(model, column_name)
        yield column.desc() if direction == "desc" else column.asc()


def _constraint_error(name: str, e: IntegrityError) -> ConstraintViolationError:
    """Map an IntegrityError to a duplicate or generic constraint error."""
    detail = str(e.orig).splitlines()[0] if e.orig is not None else str(e)
    lowered = detail.lower()
    if "unique" in lowered or "duplicate" in lowered:
        return DuplicateRecordError(f"{name} already exists ({detail})")
    return ConstraintViolationError(f"{name} violates a database constraint ({detail})")


async def find_and_count_all(
    db: AsyncSession,
    model: type[ModelT],
    condition: Condition,
    options: Sequence[ORMOption] = (),
) -> tuple[int, list[ModelT]]:
    """Return the total number of matching rows and the requested page."""
    clauses = [_clause(model, p) for p in condition.where]
    try:
        total = (
            await db.execute(select(func.count()).select_from(model).where(*clauses))
        ).scalar_one()
        result = await db.execute(
            select(model)
            .where(*clauses)
            .order_by(*_ordering(model, condition))
            .limit(condition.limit)
            .offset(condition.offset)
            .options(*options)
        )
        return total, list(result.scalars().all())
    except OperationalError as e:
        logger.error(f"Database connection error listing {model.__tablename__}: {e}")
        raise ConnectionError("Database connection failed") from e
    except Exception as e:
        logger.error(f"Unexpected error listing {model.__tablename__}: {e}")
        raise DatabaseError(f"Failed to list {model.__tablename__}: {e}") from e


async def find_by_pk(
    db: AsyncSession,
    model: type[ModelT],
    pk: int,
    options: Sequence[ORMOption] = (),
    populate_existing: bool = False,
) -> ModelT | None:
    """Get a record by primary key, or None."""
    stmt = select(model).where(model.id == pk).options(*options)  # type: ignore[attr-defined]
    if populate_existing:
        stmt = stmt.execution_options(populate_existing=True)
    try:
        result = await db.execute(stmt)
        return result.scalar_one_or_none()
    except OperationalError as e:
        logger.error(f"Database connection error in find_by_pk for {model.__tablename__} {pk}: {e}")
        raise ConnectionError("Database connection failed") from e
    except Exception as e:
        logger.error(f"Unexpected error getting {model.__tablename__} {pk}: {e}")
        raise DatabaseError(f"Failed to get {model.__tablename__}: {e}") from e


async def create_record(db: AsyncSession, model: type[ModelT], values: Mapping[str, Any]) -> ModelT:
    """Insert a new record built from ``values``."""
    try:
        record = model(**values)
        db.add(record)
        await db.flush()
        await db.refresh(record)
        return record
    except IntegrityError as e:
        logger.error(f"Integrity error creating {model.__tablename__}: {e.orig}")
        raise _constraint_error(model.__name__, e) from e
    except OperationalError as e:
        logger.error(f"Database connection error in create_record for {model.__tablename__}: {e}")
        raise ConnectionError("Database connection failed") from e
    except Exception as e:
        logger.error(f"Unexpected error creating {model.__tablename__}: {e}")
        raise DatabaseError(f"Failed to create {model.__tablename__}: {e}") from e


async def update_record(db: AsyncSession, record: ModelT, values: Mapping[str, Any]) -> ModelT:
    """Apply ``values`` to an existing record."""
    model = type(record)
    pk = record.id  # type: ignore[attr-defined]
    try:
        for key, value in values.items():
            setattr(record, key, value)
        await db.flush()
        await db.refresh(record)
        return record
    except IntegrityError as e:
        logger.error(f"Integrity error updating {model.__tablename__} {pk}: {e.orig}")
        raise _constraint_error(model.__name__, e) from e
    except OperationalError as e:
        logger.error(f"Database connection error in update_record for {model.__tablename__}: {e}")
        raise ConnectionError("Database connection failed") from e
    except Exception as e:
        logger.error(f"Unexpected error updating {model.__tablename__}: {e}")
        raise DatabaseError(f"Failed to update {model.__tablename__}: {e}") from e


async def destroy_record(db: AsyncSession, record: Base) -> None:
    """Delete a record."""
    model = type(record)
    try:
        await db.delete(record)
        await db.flush()
    except IntegrityError as e:
        logger.error(f"Integrity error deleting {model.__tablename__}: {e.orig}")
        raise _constraint_error(model.__name__, e) from e
    except OperationalError as e:
        logger.error(f"Database connection error in destroy_record for {model.__tablename__}: {e}")
        raise ConnectionError("Database connection failed") from e
    except Exception as e:
        logger.error(f"Unexpected error deleting {model.__tablename__}: {e}")
        raise DatabaseError(f"Failed to delete {model.__tablename__}: {e}") from e


async def commit_changes(db: AsyncSession) -> None:
    """Commit the unit of work so commit-time failures reach the caller."""
    try:
        await db.commit()
    except IntegrityError as e:
        logger.error(f"Integrity error on commit: {e.orig}")
        await db.rollback()
        raise _constraint_error("Record", e) from e
    except OperationalError as e:
        logger.error(f"Database connection error on commit: {e}")
        await db.rollback()
        raise ConnectionError("Database connection failed") from e
    except Exception as e:
        logger.error(f"Unexpected error on commit: {e}")
        await db.rollback()
        raise DatabaseError(f"Failed to commit: {e}") from e
