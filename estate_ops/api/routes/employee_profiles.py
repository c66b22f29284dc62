"""Employee Profile Routes — create, update and read HR records."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from estate_ops.api.dependencies import get_lifecycle
from estate_ops.core.domain_types import EntityKind
from estate_ops.schemas.employee_profile import (
    EmployeeProfileCreate, EmployeeProfileResponse, EmployeeProfileUpdate,
)
from estate_ops.services.record_lifecycle import RecordLifecycle

router = APIRouter(prefix="/api/v1/employee-profiles", tags=["employee-profiles"])


@router.post(
    "", response_model=EmployeeProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee_profile(
    body: EmployeeProfileCreate,
    lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    persisted = await lifecycle.create(
        EntityKind.EMPLOYEE_PROFILE, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.patch("/{profile_id}", response_model=EmployeeProfileResponse)
async def update_employee_profile(
    profile_id: UUID,
    body: EmployeeProfileUpdate,
    lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    """Partial update; verification_status moves forward only."""
    persisted = await lifecycle.update(
        EntityKind.EMPLOYEE_PROFILE, profile_id,
        body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.get("/{profile_id}", response_model=EmployeeProfileResponse)
async def get_employee_profile(
    profile_id: UUID, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.get(EntityKind.EMPLOYEE_PROFILE, profile_id)
