"""Employee Profile Invariants — tests for the verification state machine and identifier formats.

Tests cover:
    - HR_VERIFIED without verified_by_hr → HR_VERIFIER_REQUIRED
    - ADMIN_APPROVED without approved_by_admin → ADMIN_APPROVER_REQUIRED
    - Forward transitions pass; backward transitions → VERIFICATION_STATUS_REGRESSION
    - PAN, Aadhaar, UAN, IFSC formats; negative salary components
    - A malformed identifier does not hide verification violations
    - Explicit null on verification_status → FIELD_REQUIRED
"""

from uuid import uuid4

from estate_ops.core.domain_types import EmployeeStatus
from estate_ops.core.enforce_employee_profile import validate_employee_profile
from estate_ops.core.validation import Candidate


def _profile(**overrides) -> dict:
    base = {
        "user_id": uuid4(),
        "company_id": uuid4(),
        "employee_code": "EMP-001",
        "verification_status": "PENDING",
    }
    base.update(overrides)
    return base


# ─── verification references ─────────────────────────────────────

def test_pending_profile_passes():
    assert validate_employee_profile(Candidate(_profile())).is_valid


def test_hr_verified_requires_verifier():
    result = validate_employee_profile(Candidate(_profile(
        verification_status="HR_VERIFIED",
    )))
    assert result.rule_ids == ["HR_VERIFIER_REQUIRED"]


def test_hr_verified_with_verifier_passes():
    result = validate_employee_profile(Candidate(_profile(
        verification_status=EmployeeStatus.HR_VERIFIED, verified_by_hr=uuid4(),
    )))
    assert result.is_valid


def test_admin_approved_requires_approver():
    result = validate_employee_profile(Candidate(_profile(
        verification_status="ADMIN_APPROVED", verified_by_hr=uuid4(),
    )))
    assert result.rule_ids == ["ADMIN_APPROVER_REQUIRED"]


def test_create_may_start_approved_with_reference():
    result = validate_employee_profile(Candidate(_profile(
        verification_status="ADMIN_APPROVED", approved_by_admin=uuid4(),
    )))
    assert result.is_valid


# ─── transitions ─────────────────────────────────────────────────

def test_forward_transition_passes():
    existing = _profile()
    candidate = Candidate(
        {"verification_status": "HR_VERIFIED", "verified_by_hr": uuid4()}, existing,
    )
    assert validate_employee_profile(candidate).is_valid


def test_backward_transition_rejected():
    existing = _profile(
        verification_status="ADMIN_APPROVED",
        verified_by_hr=uuid4(), approved_by_admin=uuid4(),
    )
    candidate = Candidate({"verification_status": "PENDING"}, existing)
    assert validate_employee_profile(candidate).rule_ids == [
        "VERIFICATION_STATUS_REGRESSION",
    ]


def test_clearing_verifier_on_verified_profile_rejected():
    existing = _profile(verification_status="HR_VERIFIED", verified_by_hr=uuid4())
    candidate = Candidate({"verified_by_hr": None}, existing)
    assert validate_employee_profile(candidate).rule_ids == ["HR_VERIFIER_REQUIRED"]


# ─── identifier formats ──────────────────────────────────────────

def test_valid_identifiers_pass():
    result = validate_employee_profile(Candidate(_profile(
        pan_number="ABCDE1234F",
        aadhaar_number="123456789012",
        uan_number="100200300400",
        bank_details={"ifsc_code": "HDFC0001234"},
    )))
    assert result.is_valid


def test_invalid_identifiers_all_reported():
    result = validate_employee_profile(Candidate(_profile(
        pan_number="ABC",
        aadhaar_number="1234",
        uan_number="12AB",
        bank_details={"ifsc_code": "HDFC1001234"},
    )))
    assert result.rule_ids == [
        "INVALID_PAN_FORMAT",
        "INVALID_AADHAAR_FORMAT",
        "INVALID_UAN_FORMAT",
        "INVALID_IFSC_FORMAT",
    ]


def test_negative_salary_component_rejected():
    result = validate_employee_profile(Candidate(_profile(
        salary_structure={"basic": -5},
    )))
    assert result.rule_ids == ["NEGATIVE_VALUE"]


def test_unresolved_user_reference():
    result = validate_employee_profile(
        Candidate(_profile()), {"user_id": False, "company_id": True},
    )
    assert result.rule_ids == ["REFERENCE_NOT_FOUND"]


def test_bad_pan_does_not_hide_missing_verifier():
    result = validate_employee_profile(Candidate(_profile(
        pan_number="123", verification_status=EmployeeStatus.HR_VERIFIED,
    )))
    assert result.rule_ids == ["INVALID_PAN_FORMAT", "HR_VERIFIER_REQUIRED"]


def test_nulling_verification_status_rejected():
    existing = _profile(verification_status="HR_VERIFIED", verified_by_hr=uuid4())
    result = validate_employee_profile(
        Candidate({"verification_status": None}, existing),
    )
    assert result.rule_ids == ["FIELD_REQUIRED"]
    assert result.violations[0].field == "verification_status"
