"""Company Invariants — structural and business rules for the tenant root.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - The email set is non-empty and contains at least one PRIMARY entry
    - A business rule is skipped only when its own input field failed structurally
    - Defaulted fields (subscription, policies, flags) cannot be explicitly nulled
    - validate_company collects EVERY violation — never first-error-wins

Design Decisions:
    - Business rules return RuleViolation | None so they chain like the structural checks
    - Email entry checks report the entry index in the field path (emails.0.email)
"""

import re

from estate_ops.core.domain_types import (
    CompanyEmailType, CompanyType, CreatedByRole, EntityKind,
    IndustryType, SubscriptionPlan, SubscriptionStatus,
)
from estate_ops.core.entity_catalog import NON_NULLABLE_FIELDS, REQUIRED_FIELDS
from estate_ops.core.validation import (
    BusinessRule, Candidate, Layer, RuleViolation, ValidationResult,
    check_business_rules, check_enum, check_non_negative, check_not_nulled,
    check_pattern, check_references, check_required, enum_value, is_blank,
)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PAN_PATTERN = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
GST_PATTERN = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]")


# ─── Structural layer ───────────────────────────────────────────

def check_email_entries(record: dict) -> list[RuleViolation]:
    """Each email entry needs a known type and a well-formed address."""
    emails = record.get("emails")
    if emails is None:
        return []
    if not isinstance(emails, list):
        return [RuleViolation(
            "EMAILS_NOT_A_LIST", "emails must be a list", "emails", Layer.STRUCTURAL,
        )]
    violations = []
    allowed = {t.value for t in CompanyEmailType}
    for index, entry in enumerate(emails):
        path = f"emails.{index}"
        if not isinstance(entry, dict):
            violations.append(RuleViolation(
                "EMAIL_ENTRY_MALFORMED", "email entry must be an object",
                path, Layer.STRUCTURAL,
            ))
            continue
        violations.extend(
            RuleViolation(v.rule_id, v.message, f"{path}.{v.field}", v.layer)
            for v in check_required(entry, ("type", "email"))
        )
        email_type = entry.get("type")
        if email_type is not None and enum_value(email_type) not in allowed:
            violations.append(RuleViolation(
                "INVALID_ENUM_VALUE",
                f"{path}.type must be one of {sorted(allowed)}",
                f"{path}.type", Layer.STRUCTURAL,
            ))
        email = entry.get("email")
        if not is_blank(email) and not EMAIL_PATTERN.fullmatch(str(email)):
            violations.append(RuleViolation(
                "INVALID_EMAIL_FORMAT", "Invalid email format",
                f"{path}.email", Layer.STRUCTURAL,
            ))
    return violations


def check_company_structure(candidate: Candidate) -> list[RuleViolation]:
    """Presence, enum membership, identifier formats and quota signs."""
    record = candidate.merged
    return [
        v for v in (
            *check_not_nulled(candidate, NON_NULLABLE_FIELDS[EntityKind.COMPANY]),
            *check_required(record, REQUIRED_FIELDS[EntityKind.COMPANY]),
            *check_email_entries(record),
            check_enum(record, "created_by_role", CreatedByRole),
            check_enum(record, "company_type", CompanyType),
            check_enum(record, "industry", IndustryType),
            check_enum(record, "subscription.plan", SubscriptionPlan),
            check_enum(record, "subscription.status", SubscriptionStatus),
            check_non_negative(record, "subscription.max_users"),
            check_non_negative(record, "subscription.max_projects"),
            check_pattern(
                record, "registration_details.pan_number", PAN_PATTERN,
                "INVALID_PAN_FORMAT", "Invalid PAN format",
            ),
            check_pattern(
                record, "registration_details.gst_number", GST_PATTERN,
                "INVALID_GST_FORMAT", "Invalid GST number format",
            ),
        )
        if v is not None
    ]


# ─── Business layer ─────────────────────────────────────────────

def check_has_email(candidate: Candidate) -> RuleViolation | None:
    """Rule 1: a company must carry at least one email."""
    if not candidate.get("emails"):
        return RuleViolation(
            "COMPANY_EMAIL_REQUIRED", "At least one email is required", "emails",
        )
    return None


def check_has_primary_email(candidate: Candidate) -> RuleViolation | None:
    """Rule 2: at least one email must be tagged PRIMARY."""
    emails = candidate.get("emails") or []
    if not emails:
        return None  # reported by check_has_email
    if not any(
        enum_value(e.get("type")) == CompanyEmailType.PRIMARY.value
        for e in emails
    ):
        return RuleViolation(
            "COMPANY_PRIMARY_EMAIL_REQUIRED",
            "At least one PRIMARY email is required", "emails",
        )
    return None


BUSINESS_RULES = (
    BusinessRule(check_has_email, ("emails",)),
    BusinessRule(check_has_primary_email, ("emails",)),
)


def validate_company(
    candidate: Candidate, lookups: dict[str, bool] | None = None,
) -> ValidationResult:
    """Run both layers; each business rule runs unless its inputs failed structurally."""
    structural = check_company_structure(candidate)
    return ValidationResult.of(
        structural,
        check_business_rules(candidate, BUSINESS_RULES, structural),
        check_references(candidate, lookups, structural),
    )
