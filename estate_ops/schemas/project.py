"""Project Schemas — request/response contracts for developments.

Invariants:
    - ProjectCreate requires company_id, name, code, project_type, created_by
    - Schedule ordering (start / expected / actual completion) is checked in core/
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from estate_ops.core.domain_types import ProjectStatus, ProjectType


class ProjectLocation(BaseModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    pincode: str | None = None


class ProjectStructure(BaseModel):
    total_towers: int | None = None
    total_floors: int | None = None
    total_units: int | None = None


class ProjectCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    company_id: UUID
    name: str = Field(max_length=200)
    code: str = Field(max_length=50)
    description: str | None = None
    project_type: ProjectType
    status: ProjectStatus | None = None
    start_date: date | None = None
    expected_completion_date: date | None = None
    actual_completion_date: date | None = None
    estimated_budget: float | None = None
    actual_cost: float | None = None
    location: ProjectLocation | None = None
    structure: ProjectStructure | None = None
    project_manager: UUID | None = None
    created_by: UUID


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=200)
    code: str | None = Field(None, max_length=50)
    description: str | None = None
    project_type: ProjectType | None = None
    status: ProjectStatus | None = None
    start_date: date | None = None
    expected_completion_date: date | None = None
    actual_completion_date: date | None = None
    estimated_budget: float | None = None
    actual_cost: float | None = None
    location: ProjectLocation | None = None
    structure: ProjectStructure | None = None
    project_manager: UUID | None = None
    is_deleted: bool | None = None


class ProjectResponse(BaseModel):
    id: UUID
    company_id: UUID
    name: str
    code: str
    description: str | None = None
    project_type: ProjectType
    status: ProjectStatus
    start_date: date | None = None
    expected_completion_date: date | None = None
    actual_completion_date: date | None = None
    estimated_budget: float | None = None
    actual_cost: float | None = None
    location: ProjectLocation | None = None
    structure: ProjectStructure | None = None
    project_manager: UUID | None = None
    created_by: UUID
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
