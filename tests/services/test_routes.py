"""HTTP Routes — end-to-end create / update / get / login over the SQLite test DB.

Invariants:
    - Business rule failures → 422 with every violated rule_id
    - Structural failures → 400 STRUCTURAL_ERROR; malformed request bodies → 400 VALIDATION_ERROR
    - Unique collisions → 409 naming the field
    - Explicit null on a defaulted field → 400 STRUCTURAL_ERROR, never 409 or 500
    - User responses never include the password hash
"""

from uuid import uuid4

import pytest


def _company_body(**overrides) -> dict:
    body = {
        "company_name": "Acme Estates",
        "legal_name": "Acme Estates Pvt Ltd",
        "created_by_role": "SUPER_ADMIN",
        "emails": [{"type": "PRIMARY", "email": "Ops@Acme.com"}],
    }
    body.update(overrides)
    return body


def _user_body(company_id: str, **overrides) -> dict:
    body = {
        "first_name": "Ravi",
        "email": "ravi@acme.com",
        "role": "EMPLOYEE",
        "company_id": company_id,
        "password": "secret123",
    }
    body.update(overrides)
    return body


@pytest.fixture
async def company_id(client) -> str:
    res = await client.post("/api/v1/companies", json=_company_body())
    assert res.status_code == 201
    return res.json()["id"]


# ─── companies ───────────────────────────────────────────────────

async def test_create_company_applies_defaults(client):
    res = await client.post("/api/v1/companies", json=_company_body())
    assert res.status_code == 201
    data = res.json()
    assert data["subscription"]["plan"] == "BASIC"
    assert data["subscription"]["status"] == "TRIAL"
    assert data["subscription"]["max_users"] == 10
    assert data["subscription"]["max_projects"] == 3
    assert data["subscription"]["trial_ends_at"] is not None
    assert data["emails"] == [
        {"type": "PRIMARY", "email": "ops@acme.com", "is_verified": False},
    ]


async def test_create_company_without_primary_email_is_422(client):
    res = await client.post("/api/v1/companies", json=_company_body(
        emails=[{"type": "BILLING", "email": "billing@acme.com"}],
    ))
    assert res.status_code == 422
    error = res.json()["error"]
    assert error["code"] == "BUSINESS_RULE_VIOLATION"
    assert [v["rule_id"] for v in error["violations"]] == [
        "COMPANY_PRIMARY_EMAIL_REQUIRED",
    ]


async def test_create_company_with_bad_pan_is_400(client):
    res = await client.post("/api/v1/companies", json=_company_body(
        registration_details={"pan_number": "12345"},
    ))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "STRUCTURAL_ERROR"


async def test_unknown_field_is_request_validation_error(client):
    res = await client.post("/api/v1/companies", json=_company_body(colour="blue"))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_patch_company_and_get(client, company_id):
    res = await client.patch(
        f"/api/v1/companies/{company_id}",
        json={"subscription": {"plan": "PRO"}},
    )
    assert res.status_code == 200
    assert res.json()["subscription"]["plan"] == "PRO"
    assert res.json()["subscription"]["max_users"] == 10

    res = await client.get(f"/api/v1/companies/{company_id}")
    assert res.status_code == 200
    assert res.json()["subscription"]["plan"] == "PRO"


async def test_patch_company_null_subscription_is_400(client, company_id):
    res = await client.patch(
        f"/api/v1/companies/{company_id}", json={"subscription": None},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "STRUCTURAL_ERROR"
    assert [v["field"] for v in error["violations"]] == ["subscription"]

    res = await client.get(f"/api/v1/companies/{company_id}")
    assert res.status_code == 200
    assert res.json()["subscription"]["plan"] == "BASIC"


async def test_get_missing_company_is_404(client):
    res = await client.get(f"/api/v1/companies/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# ─── users ───────────────────────────────────────────────────────

async def test_create_user_hides_password(client, company_id):
    res = await client.post("/api/v1/users", json=_user_body(company_id))
    assert res.status_code == 201
    data = res.json()
    assert "password" not in data
    assert data["status"] == "INVITED"
    assert data["password_changed_at"] is not None


async def test_duplicate_email_is_409(client, company_id):
    await client.post("/api/v1/users", json=_user_body(company_id))
    res = await client.post(
        "/api/v1/users", json=_user_body(company_id, email="RAVI@acme.com"),
    )
    assert res.status_code == 409
    assert res.json()["error"]["context"]["field"] == "email"


async def test_user_violations_reported_together(client):
    res = await client.post("/api/v1/users", json=_user_body(
        None, password=None,
    ))
    assert res.status_code == 422
    assert [v["rule_id"] for v in res.json()["error"]["violations"]] == [
        "COMPANY_REQUIRED", "LOGIN_METHOD_REQUIRED",
    ]


async def test_super_admin_without_company(client):
    res = await client.post("/api/v1/users", json=_user_body(
        None, role="PLATFORM_SUPER_ADMIN", email="root@platform.io",
    ))
    assert res.status_code == 201
    assert res.json()["company_id"] is None


async def test_patch_user(client, company_id):
    created = await client.post("/api/v1/users", json=_user_body(company_id))
    user_id = created.json()["id"]
    res = await client.patch(f"/api/v1/users/{user_id}", json={"last_name": "Kumar"})
    assert res.status_code == 200
    assert res.json()["last_name"] == "Kumar"


async def test_patch_user_null_status_is_400(client, company_id):
    created = await client.post("/api/v1/users", json=_user_body(company_id))
    user_id = created.json()["id"]
    res = await client.patch(f"/api/v1/users/{user_id}", json={"status": None})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "STRUCTURAL_ERROR"
    assert error["violations"][0]["rule_id"] == "FIELD_REQUIRED"
    assert error["violations"][0]["field"] == "status"


# ─── auth ────────────────────────────────────────────────────────

async def test_login_succeeds_and_stamps_last_login(client, company_id):
    await client.post("/api/v1/users", json=_user_body(company_id))
    res = await client.post(
        "/api/v1/auth/login", json={"email": "Ravi@acme.com", "password": "secret123"},
    )
    assert res.status_code == 200
    assert res.json()["last_login_at"] is not None
    assert "password" not in res.json()


async def test_login_wrong_password_is_401(client, company_id):
    await client.post("/api/v1/users", json=_user_body(company_id))
    res = await client.post(
        "/api/v1/auth/login", json={"email": "ravi@acme.com", "password": "nope"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid email or password"


# ─── employee profiles / projects ────────────────────────────────

async def test_employee_profile_lifecycle(client, company_id):
    user = await client.post("/api/v1/users", json=_user_body(company_id))
    hr = await client.post("/api/v1/users", json=_user_body(
        company_id, email="hr@acme.com", role="HR_MANAGER",
    ))
    res = await client.post("/api/v1/employee-profiles", json={
        "user_id": user.json()["id"],
        "company_id": company_id,
        "employee_code": "EMP-001",
        "pan_number": "abcde1234f",
    })
    assert res.status_code == 201
    profile = res.json()
    assert profile["verification_status"] == "PENDING"
    assert profile["pan_number"] == "ABCDE1234F"

    res = await client.patch(
        f"/api/v1/employee-profiles/{profile['id']}",
        json={"verification_status": "HR_VERIFIED"},
    )
    assert res.status_code == 422
    assert res.json()["error"]["violations"][0]["rule_id"] == "HR_VERIFIER_REQUIRED"

    res = await client.patch(
        f"/api/v1/employee-profiles/{profile['id']}",
        json={"verification_status": "HR_VERIFIED", "verified_by_hr": hr.json()["id"]},
    )
    assert res.status_code == 200
    assert res.json()["verification_status"] == "HR_VERIFIED"


async def test_project_schedule_rule(client, company_id):
    admin = await client.post("/api/v1/users", json=_user_body(
        company_id, role="COMPANY_ADMIN", email="admin@acme.com",
    ))
    body = {
        "company_id": company_id,
        "name": "Skyline",
        "code": "SKY-01",
        "project_type": "RESIDENTIAL",
        "created_by": admin.json()["id"],
        "actual_completion_date": "2026-09-01",
    }
    res = await client.post("/api/v1/projects", json=body)
    assert res.status_code == 422
    assert [v["rule_id"] for v in res.json()["error"]["violations"]] == [
        "START_DATE_REQUIRED_FOR_COMPLETION",
    ]

    body["start_date"] = "2026-01-01"
    res = await client.post("/api/v1/projects", json=body)
    assert res.status_code == 201
    assert res.json()["status"] == "PLANNING"

    res = await client.get(f"/api/v1/projects/{res.json()['id']}")
    assert res.status_code == 200
    assert res.json()["code"] == "SKY-01"


async def test_project_negative_budget_reports_schedule_rule_too(client, company_id):
    admin = await client.post("/api/v1/users", json=_user_body(
        company_id, role="COMPANY_ADMIN", email="admin@acme.com",
    ))
    res = await client.post("/api/v1/projects", json={
        "company_id": company_id,
        "name": "Skyline",
        "code": "SKY-02",
        "project_type": "RESIDENTIAL",
        "created_by": admin.json()["id"],
        "estimated_budget": -5,
        "actual_completion_date": "2026-09-01",
    })
    assert res.status_code == 400
    assert [v["rule_id"] for v in res.json()["error"]["violations"]] == [
        "NEGATIVE_VALUE", "START_DATE_REQUIRED_FOR_COMPLETION",
    ]
