"""Entity Catalog — tests for create-time defaults and catalog completeness.

Tests cover:
    - Every EntityKind appears in every table
    - Company subscription defaults BASIC / TRIAL / 10 / 3
    - Partial sub-documents keep caller values and gain missing defaults
    - Explicit values win over defaults
    - Every defaulted path, nested ones included, is non-nullable
"""

from estate_ops.core.domain_types import EntityKind
from estate_ops.core.entity_catalog import (
    NON_NULLABLE_FIELDS, REFERENCE_FIELDS, REQUIRED_FIELDS, SYSTEM_MANAGED_FIELDS,
    UNIQUE_FIELDS, apply_defaults,
)


def test_every_kind_in_every_table():
    for table in (
        REQUIRED_FIELDS, UNIQUE_FIELDS, REFERENCE_FIELDS,
        SYSTEM_MANAGED_FIELDS, NON_NULLABLE_FIELDS,
    ):
        assert set(table) == set(EntityKind)


def test_user_email_is_unique_key():
    assert "email" in UNIQUE_FIELDS[EntityKind.USER]


def test_company_subscription_defaults():
    record = apply_defaults(EntityKind.COMPANY, {"company_name": "Acme"})
    assert record["subscription"] == {
        "plan": "BASIC", "status": "TRIAL", "max_users": 10, "max_projects": 3,
    }
    assert record["policies"]["allow_data_export"] is True
    assert record["is_active"] is True


def test_partial_subscription_keeps_caller_values():
    record = apply_defaults(
        EntityKind.COMPANY, {"subscription": {"plan": "PRO", "max_users": None}},
    )
    assert record["subscription"]["plan"] == "PRO"
    assert record["subscription"]["max_users"] == 10
    assert record["subscription"]["status"] == "TRIAL"


def test_defaults_are_independent_copies():
    first = apply_defaults(EntityKind.COMPANY, {})
    first["subscription"]["max_users"] = 99
    second = apply_defaults(EntityKind.COMPANY, {})
    assert second["subscription"]["max_users"] == 10


def test_user_status_defaults_to_invited():
    assert apply_defaults(EntityKind.USER, {})["status"] == "INVITED"


def test_explicit_value_wins():
    assert apply_defaults(EntityKind.USER, {"status": "ACTIVE"})["status"] == "ACTIVE"


def test_salary_flags_default_false():
    record = apply_defaults(
        EntityKind.EMPLOYEE_PROFILE, {"salary_structure": {"basic": 100.0}},
    )
    assert record["salary_structure"] == {
        "pf_applicable": False, "esi_applicable": False, "basic": 100.0,
    }
    assert record["verification_status"] == "PENDING"


def test_project_status_defaults_to_planning():
    assert apply_defaults(EntityKind.PROJECT, {})["status"] == "PLANNING"


def test_defaulted_fields_are_non_nullable():
    company = NON_NULLABLE_FIELDS[EntityKind.COMPANY]
    assert "subscription" in company
    assert "subscription.plan" in company
    assert "policies.allow_data_export" in company
    assert "is_active" in company
    assert NON_NULLABLE_FIELDS[EntityKind.USER] == (
        "status", "is_email_verified", "is_deleted",
    )
    assert NON_NULLABLE_FIELDS[EntityKind.PROJECT] == ("status", "is_deleted")
