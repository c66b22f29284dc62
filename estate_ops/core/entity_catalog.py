"""Entity Catalog — per-kind required fields, unique keys, references and defaults.

Invariants:
    - Every EntityKind has an entry in every table (no implicit fallbacks)
    - UNIQUE_FIELDS are enforced by the store, never by validators
    - REFERENCE_FIELDS map a field to the kind it must resolve to
    - apply_defaults is PURE and only fills absent keys (explicit values win)
    - NON_NULLABLE_FIELDS (every defaulted path) can never be explicitly nulled

Design Decisions:
    - Plain module-level dicts over a model registry: the lifecycle controller
      receives the store explicitly, this catalog only describes shape
    - Nested defaults (subscription, policies) fill missing sub-keys even when
      the caller supplied a partial sub-document
"""

from copy import deepcopy

from estate_ops.core.domain_types import (
    EntityKind, EmployeeStatus, ProjectStatus,
    SubscriptionPlan, SubscriptionStatus, UserStatus,
)


REQUIRED_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.COMPANY: ("company_name", "legal_name", "created_by_role"),
    EntityKind.USER: ("first_name", "email", "role"),
    EntityKind.EMPLOYEE_PROFILE: ("user_id", "company_id", "employee_code"),
    EntityKind.PROJECT: (
        "company_id", "name", "code", "project_type", "created_by",
    ),
}

UNIQUE_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.COMPANY: (),
    EntityKind.USER: ("email", "employee_profile_id"),
    EntityKind.EMPLOYEE_PROFILE: ("employee_code", "user_id"),
    EntityKind.PROJECT: ("code",),
}

REFERENCE_FIELDS: dict[EntityKind, dict[str, EntityKind]] = {
    EntityKind.COMPANY: {
        "created_by": EntityKind.USER,
    },
    EntityKind.USER: {
        "company_id": EntityKind.COMPANY,
        "employee_profile_id": EntityKind.EMPLOYEE_PROFILE,
    },
    EntityKind.EMPLOYEE_PROFILE: {
        "user_id": EntityKind.USER,
        "company_id": EntityKind.COMPANY,
        "verified_by_hr": EntityKind.USER,
        "approved_by_admin": EntityKind.USER,
    },
    EntityKind.PROJECT: {
        "company_id": EntityKind.COMPANY,
        "project_manager": EntityKind.USER,
        "created_by": EntityKind.USER,
    },
}

# Never accepted from callers; stamped by the lifecycle controller.
SYSTEM_MANAGED_FIELDS: dict[EntityKind, frozenset[str]] = {
    EntityKind.COMPANY: frozenset({"id", "created_at", "updated_at"}),
    EntityKind.USER: frozenset(
        {"id", "created_at", "updated_at", "password_changed_at"},
    ),
    EntityKind.EMPLOYEE_PROFILE: frozenset({"id", "created_at", "updated_at"}),
    EntityKind.PROJECT: frozenset({"id", "created_at", "updated_at"}),
}

_DEFAULTS: dict[EntityKind, dict] = {
    EntityKind.COMPANY: {
        "subscription": {
            "plan": SubscriptionPlan.BASIC.value,
            "status": SubscriptionStatus.TRIAL.value,
            "max_users": 10,
            "max_projects": 3,
        },
        "policies": {
            "allow_project_deletion": False,
            "allow_user_deletion": False,
            "allow_data_export": True,
        },
        "is_verified": False,
        "is_active": True,
        "is_deleted": False,
    },
    EntityKind.USER: {
        "status": UserStatus.INVITED.value,
        "is_email_verified": False,
        "is_deleted": False,
    },
    EntityKind.EMPLOYEE_PROFILE: {
        "verification_status": EmployeeStatus.PENDING.value,
        "is_deleted": False,
    },
    EntityKind.PROJECT: {
        "status": ProjectStatus.PLANNING.value,
        "is_deleted": False,
    },
}


def apply_defaults(kind: EntityKind, values: dict) -> dict:
    """Fill create-time defaults for absent (or None) keys."""
    record = dict(values)
    for name, default in _DEFAULTS[kind].items():
        current = record.get(name)
        if current is None:
            record[name] = deepcopy(default)
        elif isinstance(default, dict) and isinstance(current, dict):
            record[name] = {
                **default,
                **{k: v for k, v in current.items() if v is not None},
            }
    if kind == EntityKind.EMPLOYEE_PROFILE and isinstance(
        record.get("salary_structure"), dict,
    ):
        record["salary_structure"] = {
            "pf_applicable": False,
            "esi_applicable": False,
            **record["salary_structure"],
        }
    return record


def _always_present(defaults: dict) -> tuple[str, ...]:
    paths: list[str] = []
    for name, default in defaults.items():
        paths.append(name)
        if isinstance(default, dict):
            paths.extend(f"{name}.{sub}" for sub in default)
    return tuple(paths)


# Defaulted fields always hold a value once created; callers may change them
# but never clear them.
NON_NULLABLE_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    kind: _always_present(defaults) for kind, defaults in _DEFAULTS.items()
}
