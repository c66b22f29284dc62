"""User Schemas — request/response contracts for identities and login.

Invariants:
    - UserResponse never carries the password hash
    - password_changed_at and last_login_at are response-only (system-managed)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from estate_ops.core.domain_types import Role, UserStatus


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str = Field(max_length=320)
    password: str | None = Field(None, max_length=128)
    google_id: str | None = Field(None, max_length=255)
    role: Role
    company_id: UUID | None = None
    employee_profile_id: UUID | None = None
    status: UserStatus | None = None
    is_email_verified: bool | None = None


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=320)
    password: str | None = Field(None, max_length=128)
    google_id: str | None = Field(None, max_length=255)
    role: Role | None = None
    company_id: UUID | None = None
    employee_profile_id: UUID | None = None
    status: UserStatus | None = None
    is_email_verified: bool | None = None
    is_deleted: bool | None = None


class UserResponse(BaseModel):
    id: UUID
    first_name: str
    last_name: str | None = None
    email: str
    google_id: str | None = None
    role: Role
    company_id: UUID | None = None
    employee_profile_id: UUID | None = None
    status: UserStatus
    is_email_verified: bool
    last_login_at: datetime | None = None
    password_changed_at: datetime | None = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=128)
