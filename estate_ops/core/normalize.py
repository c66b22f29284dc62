"""Field Normalization — trimming and case folding applied before validation and storage.

Invariants:
    - PURE: returns a new dict, never mutates the input
    - Only explicitly-supplied fields are touched (absent fields stay absent)
    - Emails are lower-cased; tax IDs and bank routing codes are upper-cased
    - Company email entries always carry is_verified (false unless supplied)

Design Decisions:
    - Explicit per-kind tables over schema introspection: every transform visible in one place
    - Normalization runs BEFORE format checks so "abcde1234f" validates as a PAN
"""

from typing import Any, Callable

from estate_ops.core.domain_types import EntityKind


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _upper(value: Any) -> Any:
    return value.strip().upper() if isinstance(value, str) else value


def _normalize_emails(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return [
        {"is_verified": False, **entry, "email": _lower(entry.get("email"))}
        if isinstance(entry, dict) else entry
        for entry in value
    ]


_TRANSFORMS: dict[EntityKind, dict[str, Callable[[Any], Any]]] = {
    EntityKind.COMPANY: {
        "company_name": _strip,
        "legal_name": _strip,
        "emails": _normalize_emails,
        "registration_details.gst_number": _upper,
        "registration_details.pan_number": _upper,
        "registration_details.cin_number": _upper,
        "registration_details.tax_id": _upper,
    },
    EntityKind.USER: {
        "first_name": _strip,
        "last_name": _strip,
        "email": _lower,
    },
    EntityKind.EMPLOYEE_PROFILE: {
        "employee_code": _strip,
        "pan_number": _upper,
        "uan_number": _strip,
        "aadhaar_number": _strip,
        "bank_details.bank_name": _strip,
        "bank_details.account_number": _strip,
        "bank_details.ifsc_code": _upper,
    },
    EntityKind.PROJECT: {
        "name": _strip,
        "code": _strip,
    },
}


def normalize_changes(kind: EntityKind, changes: dict) -> dict:
    """Apply the kind's transforms to the supplied fields."""
    result = dict(changes)
    for path, transform in _TRANSFORMS[kind].items():
        head, _, tail = path.partition(".")
        if head not in result:
            continue
        if not tail:
            result[head] = transform(result[head])
            continue
        nested = result[head]
        if isinstance(nested, dict) and tail in nested:
            result[head] = {**nested, tail: transform(nested[tail])}
    return result
