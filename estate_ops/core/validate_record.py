"""Validator Routing — explicit mapping from entity kind to its invariant validator.

Invariants:
    - Every EntityKind maps to exactly one validator — adding a kind requires editing _VALIDATORS
    - validate_record is PURE; lookups are resolved by the shell beforehand
"""

from functools import partial

from estate_ops.core.domain_types import EntityKind
from estate_ops.core.enforce_company import validate_company
from estate_ops.core.enforce_employee_profile import validate_employee_profile
from estate_ops.core.enforce_project import validate_project
from estate_ops.core.enforce_user import PASSWORD_MIN_LENGTH, validate_user
from estate_ops.core.validation import Candidate, ValidationResult


def validate_record(
    kind: EntityKind,
    candidate: Candidate,
    lookups: dict[str, bool] | None = None,
    password_min_length: int = PASSWORD_MIN_LENGTH,
) -> ValidationResult:
    """Route a candidate to its kind's validator."""
    validators = {
        EntityKind.COMPANY: validate_company,
        EntityKind.USER: partial(
            validate_user, password_min_length=password_min_length,
        ),
        EntityKind.EMPLOYEE_PROFILE: validate_employee_profile,
        EntityKind.PROJECT: validate_project,
    }
    return validators[kind](candidate, lookups)
