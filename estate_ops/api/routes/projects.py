"""Project Routes — create, update and read developments."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from estate_ops.api.dependencies import get_lifecycle
from estate_ops.core.domain_types import EntityKind
from estate_ops.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from estate_ops.services.record_lifecycle import RecordLifecycle

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    persisted = await lifecycle.create(
        EntityKind.PROJECT, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    persisted = await lifecycle.update(
        EntityKind.PROJECT, project_id, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.get(EntityKind.PROJECT, project_id)
