"""User Routes — create, update and read identities.

Invariants:
    - Responses use UserResponse, which has no password field
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from estate_ops.api.dependencies import get_lifecycle
from estate_ops.core.domain_types import EntityKind
from estate_ops.schemas.user import UserCreate, UserResponse, UserUpdate
from estate_ops.services.record_lifecycle import RecordLifecycle

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    """Create a user. A supplied password is hashed before storage."""
    persisted = await lifecycle.create(
        EntityKind.USER, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    persisted = await lifecycle.update(
        EntityKind.USER, user_id, body.model_dump(exclude_unset=True),
    )
    return persisted.record


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.get(EntityKind.USER, user_id)
