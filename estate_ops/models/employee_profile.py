"""EmployeeProfile ORM — HR record, exactly one per User, scoped to a Company.

Invariants:
    - user_id unique (uq_employee_profiles_user_id): the 1:1 mapping
    - employee_code unique (uq_employee_profiles_employee_code)
    - verification_status in PENDING / HR_VERIFIED / ADMIN_APPROVED

Design Decisions:
    - JSON for bank_details, salary_structure, address, emergency_contact:
      read and written whole, never queried by sub-field
"""

import uuid
from datetime import date, datetime

from sqlalchemy import (
    String, Boolean, Date, DateTime, JSON, ForeignKey, Index, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from estate_ops.db.base import Base


class EmployeeProfile(Base):
    __tablename__ = "employee_profiles"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_employee_profiles_user_id"),
        UniqueConstraint("employee_code", name="uq_employee_profiles_employee_code"),
        Index("ix_employee_profiles_company_id", "company_id"),
        Index("ix_employee_profiles_verification_status", "verification_status"),
        Index("ix_employee_profiles_is_deleted", "is_deleted"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("companies.id"), nullable=False,
    )
    employee_code: Mapped[str] = mapped_column(String(50), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    uan_number: Mapped[str | None] = mapped_column(String(12), nullable=True)
    aadhaar_number: Mapped[str | None] = mapped_column(String(12), nullable=True)
    bank_details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    salary_structure: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    address: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    emergency_contact: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    verification_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PENDING",
    )
    verified_by_hr: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True,
    )
    approved_by_admin: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True,
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
