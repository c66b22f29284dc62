"""Boundary Protocols — the Entity Store Façade the lifecycle controller depends on.

Invariants:
    - Core NEVER imports from the shell — dependency arrows point inward only
    - All persistence reached through EntityStore, injected into RecordLifecycle
    - save() enforces uniqueness authoritatively, raising ConflictError(field)
    - Infrastructure failures surface as DependencyError (retryable)

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL store and the test fake share no base class
    - Async in Protocol: implementations do IO; the pure validators that consume
      the answers are never async themselves
"""

from typing import Protocol
from uuid import UUID

from estate_ops.core.domain_types import EntityKind


class EntityStore(Protocol):
    """Contract for record persistence — implemented by the shell."""
    async def exists(self, kind: EntityKind, record_id: UUID) -> bool: ...
    async def get(self, kind: EntityKind, record_id: UUID) -> dict | None: ...
    async def find_by_unique_key(
        self, kind: EntityKind, key: str, value: object,
    ) -> UUID | None: ...
    async def save(self, kind: EntityKind, record: dict) -> UUID: ...
