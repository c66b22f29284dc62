"""Project Invariants — tests for schedule consistency and non-negative figures.

Tests cover:
    - actual_completion_date without start_date → START_DATE_REQUIRED_FOR_COMPLETION
    - expected_completion_date before start_date → EXPECTED_COMPLETION_BEFORE_START
    - Negative budget or structure counts are structural
    - Non-date values in date fields → INVALID_DATE
    - A negative figure does not hide schedule violations
    - Explicit null on status → FIELD_REQUIRED
"""

from datetime import date
from uuid import uuid4

from estate_ops.core.enforce_project import validate_project
from estate_ops.core.validation import Candidate


def _project(**overrides) -> dict:
    base = {
        "company_id": uuid4(),
        "name": "Skyline Towers",
        "code": "SKY-01",
        "project_type": "RESIDENTIAL",
        "created_by": uuid4(),
        "status": "PLANNING",
    }
    base.update(overrides)
    return base


def test_minimal_project_passes():
    assert validate_project(Candidate(_project())).is_valid


def test_completion_without_start_rejected():
    result = validate_project(Candidate(_project(
        actual_completion_date=date(2026, 1, 1),
    )))
    assert result.rule_ids == ["START_DATE_REQUIRED_FOR_COMPLETION"]


def test_expected_before_start_rejected():
    result = validate_project(Candidate(_project(
        start_date=date(2026, 6, 1), expected_completion_date=date(2026, 1, 1),
    )))
    assert result.rule_ids == ["EXPECTED_COMPLETION_BEFORE_START"]


def test_same_day_expected_completion_passes():
    result = validate_project(Candidate(_project(
        start_date=date(2026, 6, 1), expected_completion_date=date(2026, 6, 1),
    )))
    assert result.is_valid


def test_update_judged_against_stored_start_date():
    existing = _project(start_date=date(2026, 6, 1))
    candidate = Candidate({"expected_completion_date": date(2025, 1, 1)}, existing)
    assert validate_project(candidate).rule_ids == ["EXPECTED_COMPLETION_BEFORE_START"]


def test_negative_figures_rejected():
    result = validate_project(Candidate(_project(
        estimated_budget=-1.0, structure={"total_units": -3},
    )))
    assert result.rule_ids == ["NEGATIVE_VALUE", "NEGATIVE_VALUE"]
    assert [v.field for v in result.violations] == [
        "estimated_budget", "structure.total_units",
    ]


def test_string_date_is_structural():
    result = validate_project(Candidate(_project(start_date="2026-01-01")))
    assert result.rule_ids == ["INVALID_DATE"]


def test_unknown_project_type():
    result = validate_project(Candidate(_project(project_type="CASTLE")))
    assert result.rule_ids == ["INVALID_ENUM_VALUE"]


def test_negative_budget_and_completion_without_start_both_reported():
    result = validate_project(Candidate(_project(
        estimated_budget=-5, actual_completion_date=date(2026, 3, 1),
    )))
    assert result.rule_ids == ["NEGATIVE_VALUE", "START_DATE_REQUIRED_FOR_COMPLETION"]
    assert result.has_structural_violations


def test_malformed_start_date_skips_only_schedule_rules():
    result = validate_project(Candidate(_project(
        start_date="2026-01-01",
        actual_completion_date=date(2026, 3, 1),
        actual_cost=-1,
    )))
    assert result.rule_ids == ["INVALID_DATE", "NEGATIVE_VALUE"]


def test_nulling_status_rejected():
    result = validate_project(Candidate({"status": None}, _project()))
    assert result.rule_ids == ["FIELD_REQUIRED"]
    assert result.violations[0].field == "status"
