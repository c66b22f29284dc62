"""Employee Profile Invariants — identifier formats, salary signs, verification state machine.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - HR_VERIFIED requires verified_by_hr; ADMIN_APPROVED requires approved_by_admin
    - verification_status only moves forward: PENDING -> HR_VERIFIED -> ADMIN_APPROVED
    - Identifier formats are checked on upper-cased values (see core/normalize.py)
    - verification_status and is_deleted cannot be explicitly nulled

Design Decisions:
    - Forward-only transitions are judged against the EXISTING record, so a create
      may start in any state as long as the matching reference is supplied
    - employee_code / user_id uniqueness is a store concern, not checked here
"""

import re

from estate_ops.core.domain_types import EmployeeStatus, EntityKind, Gender
from estate_ops.core.entity_catalog import NON_NULLABLE_FIELDS, REQUIRED_FIELDS
from estate_ops.core.validation import (
    BusinessRule, Candidate, RuleViolation, ValidationResult,
    check_business_rules, check_enum, check_non_negative, check_not_nulled,
    check_pattern, check_references, check_required, enum_value,
)

PAN_PATTERN = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
AADHAAR_PATTERN = re.compile(r"[0-9]{12}")
UAN_PATTERN = re.compile(r"[0-9]{12}")
IFSC_PATTERN = re.compile(r"[A-Z]{4}0[A-Z0-9]{6}")

# Position in the verification pipeline; transitions may not decrease it.
STATUS_ORDER: dict[str, int] = {
    EmployeeStatus.PENDING.value: 0,
    EmployeeStatus.HR_VERIFIED.value: 1,
    EmployeeStatus.ADMIN_APPROVED.value: 2,
}


def check_employee_profile_structure(candidate: Candidate) -> list[RuleViolation]:
    record = candidate.merged
    checks = [
        *check_not_nulled(
            candidate, NON_NULLABLE_FIELDS[EntityKind.EMPLOYEE_PROFILE],
        ),
        *check_required(record, REQUIRED_FIELDS[EntityKind.EMPLOYEE_PROFILE]),
        check_enum(record, "gender", Gender),
        check_enum(record, "verification_status", EmployeeStatus),
        check_pattern(
            record, "pan_number", PAN_PATTERN,
            "INVALID_PAN_FORMAT", "Invalid PAN format",
        ),
        check_pattern(
            record, "aadhaar_number", AADHAAR_PATTERN,
            "INVALID_AADHAAR_FORMAT", "Aadhaar number must be 12 digits",
        ),
        check_pattern(
            record, "uan_number", UAN_PATTERN,
            "INVALID_UAN_FORMAT", "UAN must be 12 digits",
        ),
        check_pattern(
            record, "bank_details.ifsc_code", IFSC_PATTERN,
            "INVALID_IFSC_FORMAT", "Invalid IFSC code format",
        ),
        check_non_negative(record, "salary_structure.basic"),
        check_non_negative(record, "salary_structure.hra"),
        check_non_negative(record, "salary_structure.allowances"),
    ]
    return [v for v in checks if v is not None]


def check_hr_verifier_present(candidate: Candidate) -> RuleViolation | None:
    """HR_VERIFIED status requires the verifying HR user."""
    record = candidate.merged
    status = enum_value(record.get("verification_status"))
    if status == EmployeeStatus.HR_VERIFIED.value and not record.get("verified_by_hr"):
        return RuleViolation(
            "HR_VERIFIER_REQUIRED", "HR verifier reference required",
            "verified_by_hr",
        )
    return None


def check_admin_approver_present(candidate: Candidate) -> RuleViolation | None:
    """ADMIN_APPROVED status requires the approving admin user."""
    record = candidate.merged
    status = enum_value(record.get("verification_status"))
    if status == EmployeeStatus.ADMIN_APPROVED.value and not record.get("approved_by_admin"):
        return RuleViolation(
            "ADMIN_APPROVER_REQUIRED", "Admin approval reference required",
            "approved_by_admin",
        )
    return None


def check_status_transition(candidate: Candidate) -> RuleViolation | None:
    """Verification status never moves backwards on update."""
    if candidate.is_create or not candidate.changed("verification_status"):
        return None
    before = STATUS_ORDER.get(enum_value(candidate.previous("verification_status")))
    after = STATUS_ORDER.get(enum_value(candidate.get("verification_status")))
    if before is not None and after is not None and after < before:
        return RuleViolation(
            "VERIFICATION_STATUS_REGRESSION",
            "Verification status cannot move backwards",
            "verification_status",
        )
    return None


BUSINESS_RULES = (
    BusinessRule(
        check_hr_verifier_present, ("verification_status", "verified_by_hr"),
    ),
    BusinessRule(
        check_admin_approver_present,
        ("verification_status", "approved_by_admin"),
    ),
    BusinessRule(check_status_transition, ("verification_status",)),
)


def validate_employee_profile(
    candidate: Candidate, lookups: dict[str, bool] | None = None,
) -> ValidationResult:
    structural = check_employee_profile_structure(candidate)
    return ValidationResult.of(
        structural,
        check_business_rules(candidate, BUSINESS_RULES, structural),
        check_references(candidate, lookups, structural),
    )
