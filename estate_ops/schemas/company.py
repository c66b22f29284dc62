"""Company Schemas — request/response contracts for the tenant root.

Invariants:
    - CompanyCreate requires company_name, legal_name, created_by_role
    - Update schemas are fully optional; routes dump them with exclude_unset so
      "not sent" and "sent as null" stay distinguishable
    - Business rules (PRIMARY email, quotas) are NOT duplicated here — core/ owns them

Design Decisions:
    - Sub-document fields default to None so nested exclude_unset keeps partial updates partial
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from estate_ops.core.domain_types import (
    CompanyEmailType, CompanyType, CreatedByRole, IndustryType,
    SubscriptionPlan, SubscriptionStatus,
)


class CompanyEmail(BaseModel):
    type: CompanyEmailType
    email: str = Field(max_length=320)
    is_verified: bool | None = None


class CompanyAddress(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    pincode: str | None = None
    landmark: str | None = None


class RegistrationDetails(BaseModel):
    gst_number: str | None = None
    pan_number: str | None = None
    cin_number: str | None = None
    tax_id: str | None = None


class Subscription(BaseModel):
    plan: SubscriptionPlan | None = None
    status: SubscriptionStatus | None = None
    max_users: int | None = None
    max_projects: int | None = None
    trial_ends_at: datetime | None = None
    subscription_ends_at: datetime | None = None


class Policies(BaseModel):
    allow_project_deletion: bool | None = None
    allow_user_deletion: bool | None = None
    allow_data_export: bool | None = None


class CompanyCreate(BaseModel):
    """Company creation — shape only; invariants enforced by the lifecycle."""
    model_config = ConfigDict(extra="forbid")

    company_name: str = Field(min_length=1, max_length=200)
    legal_name: str = Field(min_length=1, max_length=200)
    emails: list[CompanyEmail] = Field(default_factory=list)
    country_code: str | None = Field(None, max_length=8)
    phone: str | None = Field(None, max_length=32)
    address: CompanyAddress | None = None
    registration_details: RegistrationDetails | None = None
    company_type: CompanyType | None = None
    industry: IndustryType | None = None
    subscription: Subscription | None = None
    policies: Policies | None = None
    created_by_role: CreatedByRole
    is_verified: bool | None = None
    is_active: bool | None = None
    created_by: UUID | None = None


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    company_name: str | None = Field(None, max_length=200)
    legal_name: str | None = Field(None, max_length=200)
    emails: list[CompanyEmail] | None = None
    country_code: str | None = Field(None, max_length=8)
    phone: str | None = Field(None, max_length=32)
    address: CompanyAddress | None = None
    registration_details: RegistrationDetails | None = None
    company_type: CompanyType | None = None
    industry: IndustryType | None = None
    subscription: Subscription | None = None
    policies: Policies | None = None
    is_verified: bool | None = None
    is_active: bool | None = None
    is_deleted: bool | None = None


class CompanyResponse(BaseModel):
    id: UUID
    company_name: str
    legal_name: str
    emails: list[CompanyEmail]
    country_code: str | None = None
    phone: str | None = None
    address: CompanyAddress | None = None
    registration_details: RegistrationDetails | None = None
    company_type: CompanyType | None = None
    industry: IndustryType | None = None
    subscription: Subscription
    policies: Policies
    created_by_role: CreatedByRole
    is_verified: bool
    is_active: bool
    is_deleted: bool
    created_by: UUID | None = None
    created_at: datetime
    updated_at: datetime
