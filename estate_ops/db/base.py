"""SQLAlchemy Declarative Base — shared base class and record mapping for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Records handed to the core are plain dicts keyed by column name;
      Enum members are stored as their values

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Column-driven apply_record/to_record: models whose columns mirror the
      record need no per-model mapping code; Company overrides for its
      flattened sub-documents
"""

from enum import Enum
from typing import Any

from sqlalchemy.orm import DeclarativeBase


def plain(value: Any) -> Any:
    """Enum members -> values, recursively through lists and dicts."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [plain(v) for v in value]
    return value


class Base(DeclarativeBase):
    """Base class for all estate-ops ORM models."""

    def apply_record(self, record: dict) -> None:
        """Copy record fields onto matching columns (id is never overwritten)."""
        for column in self.__table__.columns:
            if column.key != "id" and column.key in record:
                setattr(self, column.key, plain(record[column.key]))

    def to_record(self) -> dict:
        return {
            column.key: getattr(self, column.key)
            for column in self.__table__.columns
        }
