"""Initial schema — companies, users, employee_profiles, projects.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("legal_name", sa.String(200), nullable=False),
        sa.Column("emails", sa.JSON, nullable=False),
        sa.Column("country_code", sa.String(8), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("address", sa.JSON, nullable=True),
        sa.Column("registration_details", sa.JSON, nullable=True),
        sa.Column("company_type", sa.String(32), nullable=True),
        sa.Column("industry", sa.String(32), nullable=True),
        sa.Column("subscription_plan", sa.String(20), nullable=False, server_default="BASIC"),
        sa.Column("subscription_status", sa.String(20), nullable=False, server_default="TRIAL"),
        sa.Column("max_users", sa.Integer, nullable=False, server_default="10"),
        sa.Column("max_projects", sa.Integer, nullable=False, server_default="3"),
        sa.Column("trial_ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("subscription_ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("allow_project_deletion", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("allow_user_deletion", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("allow_data_export", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_by_role", sa.String(20), nullable=False),
        sa.Column("is_verified", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_by", UUID(as_uuid=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_companies_company_name", "companies", ["company_name"])
    op.create_index("ix_companies_is_deleted", "companies", ["is_deleted"])
    op.create_index("ix_companies_is_active", "companies", ["is_active"])

    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password", sa.String(100), nullable=True),
        sa.Column("google_id", sa.String(255), nullable=True),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("company_id", UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=True),
        sa.Column("employee_profile_id", UUID(as_uuid=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="INVITED"),
        sa.Column("is_email_verified", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_changed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("employee_profile_id", name="uq_users_employee_profile_id"),
    )
    op.create_index("ix_users_company_id", "users", ["company_id"])
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_status", "users", ["status"])
    op.create_index("ix_users_is_deleted", "users", ["is_deleted"])
    op.create_index("ix_users_google_id", "users", ["google_id"])

    op.create_table(
        "employee_profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("company_id", UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("employee_code", sa.String(50), nullable=False),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("gender", sa.String(10), nullable=True),
        sa.Column("pan_number", sa.String(10), nullable=True),
        sa.Column("uan_number", sa.String(12), nullable=True),
        sa.Column("aadhaar_number", sa.String(12), nullable=True),
        sa.Column("bank_details", sa.JSON, nullable=True),
        sa.Column("salary_structure", sa.JSON, nullable=True),
        sa.Column("address", sa.JSON, nullable=True),
        sa.Column("emergency_contact", sa.JSON, nullable=True),
        sa.Column("verification_status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("verified_by_hr", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("approved_by_admin", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_employee_profiles_user_id"),
        sa.UniqueConstraint("employee_code", name="uq_employee_profiles_employee_code"),
    )
    op.create_index("ix_employee_profiles_company_id", "employee_profiles", ["company_id"])
    op.create_index(
        "ix_employee_profiles_verification_status", "employee_profiles", ["verification_status"],
    )
    op.create_index("ix_employee_profiles_is_deleted", "employee_profiles", ["is_deleted"])

    op.create_table(
        "projects",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("company_id", UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("project_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PLANNING"),
        sa.Column("start_date", sa.Date, nullable=True),
        sa.Column("expected_completion_date", sa.Date, nullable=True),
        sa.Column("actual_completion_date", sa.Date, nullable=True),
        sa.Column("estimated_budget", sa.Float, nullable=True),
        sa.Column("actual_cost", sa.Float, nullable=True),
        sa.Column("location", sa.JSON, nullable=True),
        sa.Column("structure", sa.JSON, nullable=True),
        sa.Column("project_manager", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_by", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
        sa.UniqueConstraint("code", name="uq_projects_code"),
    )
    op.create_index("ix_projects_company_id", "projects", ["company_id"])
    op.create_index("ix_projects_status", "projects", ["status"])
    op.create_index("ix_projects_is_deleted", "projects", ["is_deleted"])


def downgrade() -> None:
    op.drop_table("projects")
    op.drop_table("employee_profiles")
    op.drop_table("users")
    op.drop_table("companies")
