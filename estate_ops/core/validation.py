"""Validation Primitives — violations, results, candidate view, reusable structural checks.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Checks return a RuleViolation (or a list of them) on failure, None / [] on success
    - A ValidationResult is valid iff it holds zero violations
    - Candidate.merged is the record as it WOULD persist: existing record overlaid with changes

Design Decisions:
    - Return values (not exceptions) from checks: every rule runs, so the caller
      gets the complete correction list in one round trip
    - Layer tag on each violation: the lifecycle controller maps a result with
      any structural failure to StructuralError and the rest to BusinessRuleViolation
    - Business rules declare the fields they read; a rule is skipped only when
      one of its own inputs failed the structural layer
    - Dotted field paths ("subscription.max_users") for nested sub-documents
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable


class Layer(str, Enum):
    """Structural checks need only the candidate; business checks may need lookups."""
    STRUCTURAL = "structural"
    BUSINESS = "business"


@dataclass(frozen=True)
class RuleViolation:
    """One violated rule: stable id, human message, offending field."""
    rule_id: str
    message: str
    field: str | None = None
    layer: Layer = Layer.BUSINESS

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "field": self.field,
            "layer": self.layer.value,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Either valid (no violations) or an ordered list of violated rules."""
    violations: tuple[RuleViolation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def has_structural_violations(self) -> bool:
        return any(v.layer == Layer.STRUCTURAL for v in self.violations)

    @property
    def rule_ids(self) -> list[str]:
        return [v.rule_id for v in self.violations]

    @classmethod
    def of(cls, *groups: Iterable[RuleViolation | None]) -> "ValidationResult":
        """Flatten check outputs, dropping the Nones of passing checks."""
        return cls(tuple(v for group in groups for v in group if v is not None))


def merge_changes(existing: dict | None, changes: dict) -> dict:
    """Overlay explicit changes on an existing record.

    Dict-valued fields merge one level deep; an explicit None clears the field.
    """
    merged = dict(existing or {})
    for name, value in changes.items():
        current = merged.get(name)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[name] = {**current, **value}
        else:
            merged[name] = value
    return merged


@dataclass(frozen=True)
class Candidate:
    """A record submitted for validation: explicit changes plus the prior record, if any."""
    changes: dict
    existing: dict | None = None
    merged: dict = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "merged", merge_changes(self.existing, self.changes))

    @property
    def is_create(self) -> bool:
        return self.existing is None

    def get(self, path: str) -> Any:
        return value_at(self.merged, path)

    def changed(self, name: str) -> bool:
        return name in self.changes

    def previous(self, path: str) -> Any:
        return value_at(self.existing or {}, path)


def value_at(record: dict, path: str) -> Any:
    """Resolve a dotted path; missing segments resolve to None."""
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def enum_value(value: Any) -> Any:
    """Plain value of an Enum member; anything else passes through."""
    return value.value if isinstance(value, Enum) else value


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


# ─── Structural checks ──────────────────────────────────────────

def check_required(record: dict, fields: Iterable[str]) -> list[RuleViolation]:
    """Every listed field must be present and non-blank."""
    return [
        RuleViolation(
            "FIELD_REQUIRED", f"{name} is required", name, Layer.STRUCTURAL,
        )
        for name in fields
        if is_blank(value_at(record, name))
    ]


def check_pattern(
    record: dict, path: str, pattern: re.Pattern, rule_id: str, message: str,
) -> RuleViolation | None:
    """Optional string field must fully match pattern when present."""
    value = value_at(record, path)
    if is_blank(value):
        return None
    if not isinstance(value, str) or not pattern.fullmatch(value):
        return RuleViolation(rule_id, message, path, Layer.STRUCTURAL)
    return None


def check_enum(
    record: dict, path: str, enum_cls: type[Enum],
) -> RuleViolation | None:
    """Optional field must be a member of enum_cls when present."""
    value = value_at(record, path)
    if value is None:
        return None
    allowed = {m.value for m in enum_cls}
    if enum_value(value) not in allowed:
        return RuleViolation(
            "INVALID_ENUM_VALUE",
            f"{path} must be one of {sorted(allowed)}",
            path, Layer.STRUCTURAL,
        )
    return None


def check_non_negative(record: dict, path: str) -> RuleViolation | None:
    """Optional numeric field must be >= 0 when present."""
    value = value_at(record, path)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return RuleViolation(
            "NOT_A_NUMBER", f"{path} must be a number", path, Layer.STRUCTURAL,
        )
    if value < 0:
        return RuleViolation(
            "NEGATIVE_VALUE", f"{path} cannot be negative", path, Layer.STRUCTURAL,
        )
    return None


def check_min_length(
    record: dict, path: str, minimum: int, rule_id: str,
) -> RuleViolation | None:
    """Optional string field must be at least `minimum` characters when present."""
    value = value_at(record, path)
    if value is None:
        return None
    if len(str(value)) < minimum:
        return RuleViolation(
            rule_id,
            f"{path} must be at least {minimum} characters",
            path, Layer.STRUCTURAL,
        )
    return None


def check_not_nulled(
    candidate: Candidate, paths: Iterable[str],
) -> list[RuleViolation]:
    """Always-present fields cannot be cleared with an explicit null.

    Only the submitted changes are inspected: an absent key keeps its stored
    (or defaulted) value.
    """
    return [
        RuleViolation(
            "FIELD_REQUIRED", f"{path} cannot be null", path, Layer.STRUCTURAL,
        )
        for path in paths
        if _explicit_null(candidate.changes, path)
    ]


def _explicit_null(changes: dict, path: str) -> bool:
    *parents, leaf = path.split(".")
    container: Any = changes
    for part in parents:
        container = container.get(part) if isinstance(container, dict) else None
    return (
        isinstance(container, dict)
        and leaf in container
        and container[leaf] is None
    )


# ─── Business rules ─────────────────────────────────────────────

@dataclass(frozen=True)
class BusinessRule:
    """A business check and the top-level fields it reads."""
    check: Callable[[Candidate], RuleViolation | None]
    inputs: tuple[str, ...]


def failed_fields(violations: Iterable[RuleViolation]) -> frozenset[str]:
    """Top-level names of fields that carry a violation ("emails.0.email" -> "emails")."""
    return frozenset(
        v.field.split(".", 1)[0] for v in violations if v.field
    )


def check_business_rules(
    candidate: Candidate,
    rules: Iterable[BusinessRule],
    structural: Iterable[RuleViolation] = (),
) -> list[RuleViolation]:
    """Run every rule whose inputs passed the structural layer."""
    blocked = failed_fields(structural)
    violations = []
    for rule in rules:
        if blocked.intersection(rule.inputs):
            continue
        violation = rule.check(candidate)
        if violation is not None:
            violations.append(violation)
    return violations


# ─── Reference checks ───────────────────────────────────────────

def check_references(
    candidate: Candidate,
    lookups: dict[str, bool] | None,
    structural: Iterable[RuleViolation] = (),
) -> list[RuleViolation]:
    """Every reference the shell resolved must point at an existing record.

    `lookups` maps reference field -> exists. Fields the shell did not look up,
    and fields that already failed the structural layer, are not judged here.
    """
    blocked = failed_fields(structural)
    return [
        RuleViolation(
            "REFERENCE_NOT_FOUND",
            f"{name} references a record that does not exist",
            name, Layer.BUSINESS,
        )
        for name, found in (lookups or {}).items()
        if not found and name not in blocked and candidate.get(name) is not None
    ]
