"""User Invariants — role/tenant consistency and credential presence.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - PLATFORM_SUPER_ADMIN never carries a company_id
    - Every role other than COMPANY_ADMIN and PLATFORM_SUPER_ADMIN carries a company_id
    - A user has a password or an external identity (google_id) — never neither
    - Raw password length is only checked when the password is being changed
    - status, is_email_verified and is_deleted cannot be explicitly nulled

Design Decisions:
    - The tenant-membership rule exempts PLATFORM_SUPER_ADMIN: the role is
      forbidden a company, so requiring one would make it unsatisfiable
    - Email uniqueness is NOT checked here (store concern, see entity_catalog.UNIQUE_FIELDS)
"""

import re

from estate_ops.core.domain_types import EntityKind, Role, UserStatus
from estate_ops.core.entity_catalog import NON_NULLABLE_FIELDS, REQUIRED_FIELDS
from estate_ops.core.validation import (
    BusinessRule, Candidate, RuleViolation, ValidationResult,
    check_business_rules, check_enum, check_min_length, check_not_nulled,
    check_pattern, check_references, check_required, enum_value, is_blank,
)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
FIRST_NAME_MIN_LENGTH = 2
PASSWORD_MIN_LENGTH = 6

# Roles allowed to exist without a company reference.
COMPANYLESS_ROLES = frozenset(
    {Role.COMPANY_ADMIN.value, Role.PLATFORM_SUPER_ADMIN.value},
)


# ─── Structural layer ───────────────────────────────────────────

def check_user_structure(
    candidate: Candidate, password_min_length: int = PASSWORD_MIN_LENGTH,
) -> list[RuleViolation]:
    record = candidate.merged
    checks = [
        *check_not_nulled(candidate, NON_NULLABLE_FIELDS[EntityKind.USER]),
        *check_required(record, REQUIRED_FIELDS[EntityKind.USER]),
        check_min_length(
            record, "first_name", FIRST_NAME_MIN_LENGTH, "FIRST_NAME_TOO_SHORT",
        ),
        check_pattern(
            record, "email", EMAIL_PATTERN,
            "INVALID_EMAIL_FORMAT", "Invalid email format",
        ),
        check_enum(record, "role", Role),
        check_enum(record, "status", UserStatus),
    ]
    if candidate.changed("password"):
        checks.append(check_min_length(
            record, "password", password_min_length, "PASSWORD_TOO_SHORT",
        ))
    return [v for v in checks if v is not None]


# ─── Business layer ─────────────────────────────────────────────

def check_super_admin_has_no_company(candidate: Candidate) -> RuleViolation | None:
    """Rule (a): platform super admins sit above every tenant."""
    record = candidate.merged
    role = enum_value(record.get("role"))
    if role == Role.PLATFORM_SUPER_ADMIN.value and record.get("company_id"):
        return RuleViolation(
            "SUPER_ADMIN_COMPANY_FORBIDDEN",
            "Platform super admin cannot belong to a company", "company_id",
        )
    return None


def check_tenant_role_has_company(candidate: Candidate) -> RuleViolation | None:
    """Rule (b): tenant roles must belong to a company."""
    record = candidate.merged
    role = enum_value(record.get("role"))
    if role not in COMPANYLESS_ROLES and not record.get("company_id"):
        return RuleViolation(
            "COMPANY_REQUIRED", "User must belong to a company", "company_id",
        )
    return None


def check_has_login_method(candidate: Candidate) -> RuleViolation | None:
    """Rule (c): password or external identity, never neither."""
    record = candidate.merged
    if is_blank(record.get("password")) and is_blank(record.get("google_id")):
        return RuleViolation(
            "LOGIN_METHOD_REQUIRED",
            "User must have password or Google login", "password",
        )
    return None


BUSINESS_RULES = (
    BusinessRule(check_super_admin_has_no_company, ("role", "company_id")),
    BusinessRule(check_tenant_role_has_company, ("role", "company_id")),
    BusinessRule(check_has_login_method, ("password", "google_id")),
)


def validate_user(
    candidate: Candidate,
    lookups: dict[str, bool] | None = None,
    password_min_length: int = PASSWORD_MIN_LENGTH,
) -> ValidationResult:
    structural = check_user_structure(candidate, password_min_length)
    return ValidationResult.of(
        structural,
        check_business_rules(candidate, BUSINESS_RULES, structural),
        check_references(candidate, lookups, structural),
    )
