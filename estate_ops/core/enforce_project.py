"""Project Invariants — schedule consistency and non-negative figures.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - actual_completion_date requires start_date
    - expected_completion_date, when both are set, is on or after start_date
    - Budget, cost and structure counts are never negative
    - A schedule rule is skipped only when one of its own date fields is malformed
"""

from datetime import date, datetime

from estate_ops.core.domain_types import EntityKind, ProjectStatus, ProjectType
from estate_ops.core.entity_catalog import NON_NULLABLE_FIELDS, REQUIRED_FIELDS
from estate_ops.core.validation import (
    BusinessRule, Candidate, Layer, RuleViolation, ValidationResult,
    check_business_rules, check_enum, check_non_negative, check_not_nulled,
    check_references, check_required,
)

DATE_FIELDS = ("start_date", "expected_completion_date", "actual_completion_date")
NON_NEGATIVE_FIELDS = (
    "estimated_budget",
    "actual_cost",
    "structure.total_towers",
    "structure.total_floors",
    "structure.total_units",
)


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def check_date_types(record: dict) -> list[RuleViolation]:
    return [
        RuleViolation(
            "INVALID_DATE", f"{name} must be a date", name, Layer.STRUCTURAL,
        )
        for name in DATE_FIELDS
        if record.get(name) is not None and not isinstance(record[name], date)
    ]


def check_project_structure(candidate: Candidate) -> list[RuleViolation]:
    record = candidate.merged
    checks = [
        *check_not_nulled(candidate, NON_NULLABLE_FIELDS[EntityKind.PROJECT]),
        *check_required(record, REQUIRED_FIELDS[EntityKind.PROJECT]),
        check_enum(record, "project_type", ProjectType),
        check_enum(record, "status", ProjectStatus),
        *check_date_types(record),
        *(check_non_negative(record, name) for name in NON_NEGATIVE_FIELDS),
    ]
    return [v for v in checks if v is not None]


def check_completion_has_start(candidate: Candidate) -> RuleViolation | None:
    """A project cannot finish before it has started."""
    record = candidate.merged
    if record.get("actual_completion_date") and not record.get("start_date"):
        return RuleViolation(
            "START_DATE_REQUIRED_FOR_COMPLETION",
            "Start date required before completion", "start_date",
        )
    return None


def check_expected_completion_after_start(
    candidate: Candidate,
) -> RuleViolation | None:
    record = candidate.merged
    expected = _as_date(record.get("expected_completion_date"))
    start = _as_date(record.get("start_date"))
    if expected and start and expected < start:
        return RuleViolation(
            "EXPECTED_COMPLETION_BEFORE_START",
            "Expected completion cannot be before start date",
            "expected_completion_date",
        )
    return None


BUSINESS_RULES = (
    BusinessRule(
        check_completion_has_start, ("actual_completion_date", "start_date"),
    ),
    BusinessRule(
        check_expected_completion_after_start,
        ("expected_completion_date", "start_date"),
    ),
)


def validate_project(
    candidate: Candidate, lookups: dict[str, bool] | None = None,
) -> ValidationResult:
    structural = check_project_structure(candidate)
    return ValidationResult.of(
        structural,
        check_business_rules(candidate, BUSINESS_RULES, structural),
        check_references(candidate, lookups, structural),
    )
