"""Company ORM — persists the tenant root.

Invariants:
    - id is UUID primary key
    - emails stored as JSON list of {type, email, is_verified}
    - subscription and policies flattened into columns, re-nested by to_record()

Design Decisions:
    - JSON columns for address / registration_details: free-form sub-documents, no querying needed
    - Flattened subscription columns: plan/status/quota are filtered and reported on
    - created_by has no FK: users reference companies, a cycle the controller resolves instead
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Integer, Boolean, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from estate_ops.db.base import Base, plain

_SUBSCRIPTION_COLUMNS = {
    "plan": "subscription_plan",
    "status": "subscription_status",
    "max_users": "max_users",
    "max_projects": "max_projects",
    "trial_ends_at": "trial_ends_at",
    "subscription_ends_at": "subscription_ends_at",
}
_POLICY_COLUMNS = (
    "allow_project_deletion", "allow_user_deletion", "allow_data_export",
)


class Company(Base):
    """Company entity — tenant root."""
    __tablename__ = "companies"
    __table_args__ = (
        Index("ix_companies_company_name", "company_name"),
        Index("ix_companies_is_deleted", "is_deleted"),
        Index("ix_companies_is_active", "is_active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    legal_name: Mapped[str] = mapped_column(String(200), nullable=False)
    emails: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    country_code: Mapped[str | None] = mapped_column(String(8), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    registration_details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    company_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Subscription
    subscription_plan: Mapped[str] = mapped_column(
        String(20), nullable=False, default="BASIC",
    )
    subscription_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="TRIAL",
    )
    max_users: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    max_projects: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    trial_ends_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    subscription_ends_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    # Policies
    allow_project_deletion: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    allow_user_deletion: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    allow_data_export: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )

    created_by_role: Mapped[str] = mapped_column(String(20), nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def apply_record(self, record: dict) -> None:
        flat = dict(record)
        subscription = flat.pop("subscription", None) or {}
        for key, column in _SUBSCRIPTION_COLUMNS.items():
            if key in subscription:
                flat[column] = subscription[key]
        policies = flat.pop("policies", None) or {}
        for key in _POLICY_COLUMNS:
            if key in policies:
                flat[key] = policies[key]
        super().apply_record(flat)

    def to_record(self) -> dict:
        record = super().to_record()
        record["subscription"] = {
            key: record.pop(column) for key, column in _SUBSCRIPTION_COLUMNS.items()
        }
        record["policies"] = {key: record.pop(key) for key in _POLICY_COLUMNS}
        return plain(record)
