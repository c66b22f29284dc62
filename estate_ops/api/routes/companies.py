"""Company Routes — create, update and read the tenant root."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from estate_ops.api.dependencies import get_lifecycle
from estate_ops.core.domain_types import EntityKind
from estate_ops.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from estate_ops.services.record_lifecycle import RecordLifecycle

router = APIRouter(prefix="/api/v1/companies", tags=["companies"])


@router.post(
    "", response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_company(
    body: CompanyCreate, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    """Create a company. Subscription and policy defaults are filled in."""
    persisted = await lifecycle.create(
        EntityKind.COMPANY, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: UUID,
    body: CompanyUpdate,
    lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    persisted = await lifecycle.update(
        EntityKind.COMPANY, company_id, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: UUID, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.get(EntityKind.COMPANY, company_id)
