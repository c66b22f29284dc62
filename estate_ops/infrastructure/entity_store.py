"""SQL Entity Store — EntityStore Protocol implemented over an async SQLAlchemy session.

Invariants:
    - Unique constraints in the schema are the authoritative uniqueness arbiter:
      IntegrityError on a unique key becomes ConflictError naming the colliding field
    - IntegrityError on any other constraint becomes StoreIntegrityError, never a conflict
    - Any other SQLAlchemy failure becomes DependencyError (retryable) after rollback
    - Records in and out are plain dicts (see db/base.py); ORM rows never leak

Design Decisions:
    - One store per request session: FastAPI's get_db scopes the unit of work
    - Conflicting field recovered from the constraint name / driver message,
      matched against the kind's declared UNIQUE_FIELDS only
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from estate_ops.core.domain_types import EntityKind
from estate_ops.core.entity_catalog import UNIQUE_FIELDS
from estate_ops.core.errors import (
    ConflictError, DependencyError, ErrorCategory, StoreIntegrityError,
)
from estate_ops.db.base import Base
from estate_ops.models import Company, EmployeeProfile, Project, User

logger = logging.getLogger(__name__)

_MODELS: dict[EntityKind, type[Base]] = {
    EntityKind.COMPANY: Company,
    EntityKind.USER: User,
    EntityKind.EMPLOYEE_PROFILE: EmployeeProfile,
    EntityKind.PROJECT: Project,
}


class SqlEntityStore:
    """Entity store backed by the relational schema in models/."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def exists(self, kind: EntityKind, record_id: UUID) -> bool:
        model = _MODELS[kind]
        async with self._guard(kind, "exists"):
            result = await self._db.execute(
                select(model.id).where(model.id == record_id),
            )
            return result.scalar_one_or_none() is not None

    async def get(self, kind: EntityKind, record_id: UUID) -> dict | None:
        async with self._guard(kind, "get"):
            row = await self._db.get(_MODELS[kind], record_id)
        return row.to_record() if row else None

    async def find_by_unique_key(
        self, kind: EntityKind, key: str, value: object,
    ) -> UUID | None:
        if key not in UNIQUE_FIELDS[kind]:
            raise ValueError(f"{key} is not a unique key of {kind.value}")
        model = _MODELS[kind]
        async with self._guard(kind, "find_by_unique_key"):
            result = await self._db.execute(
                select(model.id).where(getattr(model, key) == value),
            )
            return result.scalar_one_or_none()

    async def save(self, kind: EntityKind, record: dict) -> UUID:
        """Insert or update; commits the session."""
        model = _MODELS[kind]
        async with self._guard(kind, "save"):
            record_id = record.get("id")
            row = await self._db.get(model, record_id) if record_id else None
            if row is None:
                row = model()
                if record_id:
                    row.id = record_id
                self._db.add(row)
            row.apply_record(record)
            await self._db.flush()
            await self._db.commit()
            return row.id

    @asynccontextmanager
    async def _guard(self, kind: EntityKind, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError as e:
            await self._db.rollback()
            field = _conflicting_field(kind, e)
            if field is None:
                logger.error(
                    f"Store {operation} violated a constraint for {kind.value}: {e.orig}",
                    extra={"entity_kind": kind.value, "operation": operation},
                )
                raise StoreIntegrityError(operation, kind.value)
            logger.warning(
                f"Unique constraint rejected {kind.value}",
                extra={"entity_kind": kind.value, "field": field, "operation": operation},
            )
            raise ConflictError(field, kind.value)
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Store {operation} failed for {kind.value}: {e}",
                extra={"entity_kind": kind.value, "operation": operation},
            )
            raise DependencyError(
                "Database operation failed", operation, ErrorCategory.DATABASE,
            )


def _conflicting_field(kind: EntityKind, error: IntegrityError) -> str | None:
    """Match the driver message against the kind's unique columns.

    None when the violated constraint is not a unique key (NOT NULL, foreign key).
    """
    message = str(error.orig)
    table = _MODELS[kind].__tablename__
    sqlite_unique = message.startswith("UNIQUE constraint failed")
    for name in UNIQUE_FIELDS[kind]:
        if f"uq_{table}_{name}" in message or (
            sqlite_unique and f"{table}.{name}" in message
        ):
            return name
    return None
