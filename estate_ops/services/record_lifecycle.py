"""Record Lifecycle — validate, derive, check uniqueness, persist. One record per mutation.

Invariants:
    - Fixed pipeline order: normalize -> defaults (create) -> resolve references ->
      validate -> derive credential (user) -> uniqueness pre-check -> stamp -> save
    - Validation collects every violation before raising (never fail-fast)
    - A raw password never reaches the store: it is replaced by its bcrypt hash
      and password_changed_at is stamped in the same step
    - The uniqueness pre-check is advisory; store.save() is the authoritative
      arbiter and its ConflictError propagates unchanged
    - Only DependencyError is retryable

Design Decisions:
    - Explicit pipeline over ORM pre-save hooks: ordering and side effects auditable
    - Store injected (EntityStore Protocol): no global model registry
    - bcrypt runs via asyncio.to_thread: hashing never blocks the event loop
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

from estate_ops.config import Settings
from estate_ops.core.credentials import (
    DEFAULT_ROUNDS, derive_credential, verify_credential,
)
from estate_ops.core.domain_types import (
    EntityKind, MutationKind, SubscriptionStatus, UserStatus,
)
from estate_ops.core.entity_catalog import (
    REFERENCE_FIELDS, SYSTEM_MANAGED_FIELDS, UNIQUE_FIELDS, apply_defaults,
)
from estate_ops.core.enforce_user import PASSWORD_MIN_LENGTH
from estate_ops.core.errors import (
    AuthenticationError, BusinessRuleViolation, ConflictError,
    DependencyError, ErrorContext, ResourceNotFoundError, StructuralError,
)
from estate_ops.core.normalize import normalize_changes
from estate_ops.core.repository_protocols import EntityStore
from estate_ops.core.validate_record import validate_record
from estate_ops.core.validation import Candidate, enum_value, is_blank

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PersistedRecord:
    """Outcome of a successful mutation: store id plus the record as saved."""
    id: UUID
    record: dict


class RecordLifecycle:
    """Orchestrates create/update for every entity kind against an injected store."""

    def __init__(
        self,
        store: EntityStore,
        password_hash_rounds: int = DEFAULT_ROUNDS,
        password_min_length: int = PASSWORD_MIN_LENGTH,
        trial_period_days: int = 14,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._rounds = password_hash_rounds
        self._password_min_length = password_min_length
        self._trial_period = timedelta(days=trial_period_days)
        self._clock = clock

    @classmethod
    def from_settings(cls, store: EntityStore, settings: Settings) -> "RecordLifecycle":
        return cls(
            store,
            password_hash_rounds=settings.password_hash_rounds,
            password_min_length=settings.password_min_length,
            trial_period_days=settings.trial_period_days,
        )

    # ─── Public operations ───────────────────────────────────────

    async def create(self, kind: EntityKind, values: dict) -> PersistedRecord:
        """Persist a new record after the full pipeline."""
        changes = apply_defaults(kind, self._accepted(kind, values))
        return await self._commit(kind, Candidate(changes), record_id=None)

    async def update(
        self, kind: EntityKind, record_id: UUID, changes: dict,
    ) -> PersistedRecord:
        """Apply explicitly-set fields to an existing record."""
        existing = await self.get(kind, record_id)
        candidate = Candidate(self._accepted(kind, changes), existing)
        return await self._commit(kind, candidate, record_id=record_id)

    async def get(self, kind: EntityKind, record_id: UUID) -> dict:
        record = await self._store.get(kind, record_id)
        if record is None:
            raise ResourceNotFoundError(kind.value, str(record_id))
        return record

    async def authenticate(self, email: str, password: str) -> dict:
        """Verify a password login and stamp last_login_at.

        Every failure raises the same AuthenticationError.
        """
        normalized = normalize_changes(EntityKind.USER, {"email": email})["email"]
        user_id = await self._store.find_by_unique_key(
            EntityKind.USER, "email", normalized,
        )
        user = await self._store.get(EntityKind.USER, user_id) if user_id else None
        if user is None or user.get("is_deleted"):
            raise AuthenticationError()
        if enum_value(user.get("status")) == UserStatus.SUSPENDED.value:
            raise AuthenticationError()
        matches = await asyncio.to_thread(
            verify_credential, password, user.get("password"),
        )
        if not matches:
            logger.info(
                "Rejected login", extra={"entity_kind": "user", "record_id": str(user_id)},
            )
            raise AuthenticationError()
        user = {**user, "last_login_at": self._clock()}
        await self._save(EntityKind.USER, user)
        return user

    # ─── Pipeline ───────────────────────────────────────────────

    def _accepted(self, kind: EntityKind, values: dict) -> dict:
        """Drop system-managed fields, then normalize what remains."""
        managed = SYSTEM_MANAGED_FIELDS[kind]
        return normalize_changes(
            kind, {k: v for k, v in values.items() if k not in managed},
        )

    async def _commit(
        self, kind: EntityKind, candidate: Candidate, record_id: UUID | None,
    ) -> PersistedRecord:
        context = ErrorContext(
            entity_kind=kind.value,
            record_id=str(record_id) if record_id else None,
        )
        lookups = await self._resolve_references(kind, candidate)
        result = validate_record(
            kind, candidate, lookups,
            password_min_length=self._password_min_length,
        )
        if not result.is_valid:
            logger.warning(
                f"Rejected {kind.value} mutation",
                extra={
                    "entity_kind": kind.value,
                    "record_id": context.record_id,
                    "rule_ids": result.rule_ids,
                },
            )
            violations = list(result.violations)
            if result.has_structural_violations:
                raise StructuralError(violations, context)
            raise BusinessRuleViolation(violations, context)

        record = dict(candidate.merged)
        if kind == EntityKind.USER:
            record = await self._derive_credential(candidate, record)
        await self._check_unique(kind, candidate, record, record_id, context)
        record = self._stamp(kind, record, candidate.is_create)

        persisted_id = await self._save(kind, record)
        record["id"] = persisted_id
        logger.info(
            f"Persisted {kind.value}",
            extra={
                "entity_kind": kind.value,
                "record_id": str(persisted_id),
                "operation": (
                    MutationKind.CREATE if candidate.is_create else MutationKind.UPDATE
                ).value,
            },
        )
        return PersistedRecord(persisted_id, record)

    async def _resolve_references(
        self, kind: EntityKind, candidate: Candidate,
    ) -> dict[str, bool]:
        """Existence of every reference set (create) or changed (update)."""
        lookups = {}
        for name, target in REFERENCE_FIELDS[kind].items():
            value = candidate.get(name)
            if value is None or not candidate.changed(name):
                continue
            if not isinstance(value, UUID):
                lookups[name] = False
                continue
            lookups[name] = await self._store.exists(target, value)
        return lookups

    async def _derive_credential(self, candidate: Candidate, record: dict) -> dict:
        """Swap a changed raw password for its hash, stamping the change time."""
        if not candidate.changed("password") or is_blank(record.get("password")):
            return record
        record["password"] = await asyncio.to_thread(
            derive_credential, record["password"], self._rounds,
        )
        record["password_changed_at"] = self._clock()
        return record

    async def _check_unique(
        self,
        kind: EntityKind,
        candidate: Candidate,
        record: dict,
        record_id: UUID | None,
        context: ErrorContext,
    ) -> None:
        for name in UNIQUE_FIELDS[kind]:
            value = record.get(name)
            if value is None or not candidate.changed(name):
                continue
            holder = await self._store.find_by_unique_key(kind, name, value)
            if holder is not None and holder != record_id:
                raise ConflictError(name, kind.value, context)

    def _stamp(self, kind: EntityKind, record: dict, is_create: bool) -> dict:
        now = self._clock()
        if is_create:
            record["created_at"] = now
            if kind == EntityKind.COMPANY:
                subscription = record.get("subscription") or {}
                if (
                    enum_value(subscription.get("status")) == SubscriptionStatus.TRIAL.value
                    and subscription.get("trial_ends_at") is None
                ):
                    record["subscription"] = {
                        **subscription, "trial_ends_at": now + self._trial_period,
                    }
        record["updated_at"] = now
        return record

    async def _save(self, kind: EntityKind, record: dict) -> UUID:
        try:
            return await self._store.save(kind, record)
        except (ConnectionError, TimeoutError, OSError) as e:
            logger.error(
                f"Store unavailable while saving {kind.value}: {e}",
                extra={"entity_kind": kind.value, "operation": "save"},
            )
            raise DependencyError(str(e), "save")
