"""Route Dependencies — wires the request's DB session into a RecordLifecycle.

Invariants:
    - One SqlEntityStore and one RecordLifecycle per request (scoped to get_db's session)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from estate_ops.config import get_settings
from estate_ops.infrastructure.database import get_db
from estate_ops.infrastructure.entity_store import SqlEntityStore
from estate_ops.services.record_lifecycle import RecordLifecycle


async def get_lifecycle(db: AsyncSession = Depends(get_db)) -> RecordLifecycle:
    return RecordLifecycle.from_settings(SqlEntityStore(db), get_settings())
