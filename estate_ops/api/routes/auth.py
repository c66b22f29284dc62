"""Auth Routes — password login against the stored bcrypt credential.

Invariants:
    - Wrong email and wrong password are indistinguishable to the caller (401)
"""

from fastapi import APIRouter, Depends

from estate_ops.api.dependencies import get_lifecycle
from estate_ops.schemas.user import LoginRequest, UserResponse
from estate_ops.services.record_lifecycle import RecordLifecycle

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=UserResponse)
async def login(
    body: LoginRequest, lifecycle: RecordLifecycle = Depends(get_lifecycle),
):
    """Verify credentials and stamp last_login_at."""
    return await lifecycle.authenticate(body.email, body.password)
