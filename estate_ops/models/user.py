"""User ORM — persists identities, both platform-level and tenant-scoped.

Invariants:
    - email is unique (uq_users_email) and stored lower-cased
    - employee_profile_id is unique when set (one user per profile)
    - password holds the bcrypt hash only; the raw value never reaches this table
    - company_id is NULL exactly for company-less roles (enforced in core/enforce_user.py)

Design Decisions:
    - employee_profile_id has no FK: profiles reference users, a cycle the controller resolves
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    String, Boolean, DateTime, ForeignKey, Index, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from estate_ops.db.base import Base


class User(Base):
    """User entity — login identity with a role."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("employee_profile_id", name="uq_users_employee_profile_id"),
        Index("ix_users_company_id", "company_id"),
        Index("ix_users_role", "role"),
        Index("ix_users_status", "status"),
        Index("ix_users_is_deleted", "is_deleted"),
        Index("ix_users_google_id", "google_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    password: Mapped[str | None] = mapped_column(String(100), nullable=True)
    google_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    company_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("companies.id"), nullable=True,
    )
    employee_profile_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="INVITED",
    )
    is_email_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    password_changed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
