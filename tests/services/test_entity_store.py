"""SQL Entity Store — tests for record mapping and constraint translation on SQLite.

Tests cover:
    - Company sub-documents flattened on save and re-nested on get
    - exists / get / find_by_unique_key against real rows
    - Duplicate unique value on save → ConflictError naming the field
    - NOT NULL rejection on save → StoreIntegrityError, never a conflict
    - Session manager never reports an IntegrityError as a conflict
    - find_by_unique_key refuses non-unique keys
    - Enum members stored as plain values
"""

from uuid import uuid4

import pytest

from estate_ops.core.domain_types import EntityKind, Role
from sqlalchemy import text

from estate_ops.core.errors import ConflictError, StoreIntegrityError
from estate_ops.infrastructure.database import DatabaseSessionManager
from estate_ops.infrastructure.entity_store import SqlEntityStore

from tests.services.fake_store import FIXED_NOW


def _company_record() -> dict:
    return {
        "company_name": "Acme Estates",
        "legal_name": "Acme Estates Pvt Ltd",
        "created_by_role": "SUPER_ADMIN",
        "emails": [{"type": "PRIMARY", "email": "ops@acme.com", "is_verified": False}],
        "subscription": {
            "plan": "BASIC", "status": "TRIAL", "max_users": 10, "max_projects": 3,
        },
        "policies": {
            "allow_project_deletion": False,
            "allow_user_deletion": False,
            "allow_data_export": True,
        },
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }


def _user_record(**overrides) -> dict:
    record = {
        "first_name": "Ravi",
        "email": "ravi@acme.com",
        "role": Role.COMPANY_ADMIN,
        "password": "$2b$04$notarealhashbutfitsthecolumn",
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    record.update(overrides)
    return record


@pytest.fixture
def sql_store(test_db):
    return SqlEntityStore(test_db)


async def test_company_round_trips_nested_documents(sql_store):
    company_id = await sql_store.save(EntityKind.COMPANY, _company_record())
    record = await sql_store.get(EntityKind.COMPANY, company_id)
    assert record["id"] == company_id
    assert record["subscription"]["plan"] == "BASIC"
    assert record["subscription"]["max_projects"] == 3
    assert record["policies"]["allow_data_export"] is True
    assert record["emails"][0]["email"] == "ops@acme.com"
    assert "subscription_plan" not in record


async def test_exists_and_get_missing(sql_store):
    assert await sql_store.exists(EntityKind.COMPANY, uuid4()) is False
    assert await sql_store.get(EntityKind.COMPANY, uuid4()) is None


async def test_enum_members_stored_as_values(sql_store):
    user_id = await sql_store.save(EntityKind.USER, _user_record())
    record = await sql_store.get(EntityKind.USER, user_id)
    assert record["role"] == "COMPANY_ADMIN"
    assert await sql_store.exists(EntityKind.USER, user_id) is True


async def test_find_by_unique_key(sql_store):
    user_id = await sql_store.save(EntityKind.USER, _user_record())
    assert await sql_store.find_by_unique_key(
        EntityKind.USER, "email", "ravi@acme.com",
    ) == user_id
    assert await sql_store.find_by_unique_key(
        EntityKind.USER, "email", "nobody@acme.com",
    ) is None


async def test_find_by_non_unique_key_refused(sql_store):
    with pytest.raises(ValueError):
        await sql_store.find_by_unique_key(EntityKind.USER, "first_name", "Ravi")


async def test_duplicate_email_on_save_is_conflict(sql_store):
    await sql_store.save(EntityKind.USER, _user_record())
    with pytest.raises(ConflictError) as exc_info:
        await sql_store.save(EntityKind.USER, _user_record(first_name="Asha"))
    assert exc_info.value.field == "email"


async def test_update_keeps_identity(sql_store):
    user_id = await sql_store.save(EntityKind.USER, _user_record())
    record = await sql_store.get(EntityKind.USER, user_id)
    saved_id = await sql_store.save(EntityKind.USER, {**record, "last_name": "Kumar"})
    assert saved_id == user_id
    assert (await sql_store.get(EntityKind.USER, user_id))["last_name"] == "Kumar"


async def test_null_on_required_column_is_not_a_conflict(sql_store):
    user_id = await sql_store.save(EntityKind.USER, _user_record())
    record = await sql_store.get(EntityKind.USER, user_id)
    with pytest.raises(StoreIntegrityError) as exc_info:
        await sql_store.save(EntityKind.USER, {**record, "status": None})
    assert not isinstance(exc_info.value, ConflictError)
    assert exc_info.value.http_status == 500
    assert exc_info.value.retryable is False
    # session rolled back and still usable
    assert await sql_store.find_by_unique_key(
        EntityKind.USER, "email", "ravi@acme.com",
    ) == user_id


async def test_not_null_on_unique_column_is_not_a_conflict(sql_store):
    user_id = await sql_store.save(EntityKind.USER, _user_record())
    record = await sql_store.get(EntityKind.USER, user_id)
    with pytest.raises(StoreIntegrityError):
        await sql_store.save(EntityKind.USER, {**record, "email": None})


async def test_session_manager_integrity_error_is_not_a_conflict(
    test_engine, test_session_factory,
):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory

    with pytest.raises(StoreIntegrityError) as exc_info:
        async with manager.session() as db:
            await db.execute(text(
                "INSERT INTO users (id, first_name) VALUES ('u-1', 'Ravi')"
            ))
    assert not isinstance(exc_info.value, ConflictError)
    assert exc_info.value.code == "STORE_INTEGRITY_ERROR"
