"""Employee Profile Schemas — request/response contracts for HR records.

Invariants:
    - Identifier formats (PAN, Aadhaar, UAN, IFSC) are validated in core/, after upper-casing
    - verification_status references (verified_by_hr, approved_by_admin) are checked in core/
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from estate_ops.core.domain_types import EmployeeStatus, Gender


class BankDetails(BaseModel):
    bank_name: str | None = None
    account_number: str | None = None
    ifsc_code: str | None = None


class SalaryStructure(BaseModel):
    basic: float | None = None
    hra: float | None = None
    allowances: float | None = None
    pf_applicable: bool | None = None
    esi_applicable: bool | None = None


class EmployeeAddress(BaseModel):
    current_address: str | None = None
    permanent_address: str | None = None


class EmergencyContact(BaseModel):
    name: str | None = None
    phone: str | None = None
    relation: str | None = None


class EmployeeProfileCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: UUID
    company_id: UUID
    employee_code: str = Field(max_length=50)
    date_of_birth: date | None = None
    gender: Gender | None = None
    pan_number: str | None = Field(None, max_length=10)
    uan_number: str | None = Field(None, max_length=12)
    aadhaar_number: str | None = Field(None, max_length=12)
    bank_details: BankDetails | None = None
    salary_structure: SalaryStructure | None = None
    address: EmployeeAddress | None = None
    emergency_contact: EmergencyContact | None = None
    verification_status: EmployeeStatus | None = None
    verified_by_hr: UUID | None = None
    approved_by_admin: UUID | None = None


class EmployeeProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_code: str | None = Field(None, max_length=50)
    date_of_birth: date | None = None
    gender: Gender | None = None
    pan_number: str | None = Field(None, max_length=10)
    uan_number: str | None = Field(None, max_length=12)
    aadhaar_number: str | None = Field(None, max_length=12)
    bank_details: BankDetails | None = None
    salary_structure: SalaryStructure | None = None
    address: EmployeeAddress | None = None
    emergency_contact: EmergencyContact | None = None
    verification_status: EmployeeStatus | None = None
    verified_by_hr: UUID | None = None
    approved_by_admin: UUID | None = None
    is_deleted: bool | None = None


class EmployeeProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    company_id: UUID
    employee_code: str
    date_of_birth: date | None = None
    gender: Gender | None = None
    pan_number: str | None = None
    uan_number: str | None = None
    aadhaar_number: str | None = None
    bank_details: BankDetails | None = None
    salary_structure: SalaryStructure | None = None
    address: EmployeeAddress | None = None
    emergency_contact: EmergencyContact | None = None
    verification_status: EmployeeStatus
    verified_by_hr: UUID | None = None
    approved_by_admin: UUID | None = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
