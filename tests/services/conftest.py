"""Service test fixtures — in-memory entity store, async DB, FastAPI test client.

Invariants:
    - Lifecycle tests run against InMemoryEntityStore (tests/services/fake_store.py)
    - Every SQL test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - bcrypt runs at cost 4 everywhere in tests

Design Decisions:
    - Fake store over mocks: the lifecycle is exercised against real uniqueness semantics
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from estate_ops.core.domain_types import EntityKind
from estate_ops.db.base import Base
from estate_ops.infrastructure.database import get_db
from estate_ops.main import app
from estate_ops.services.record_lifecycle import RecordLifecycle

from tests.services.fake_store import FAST_ROUNDS, FIXED_NOW, InMemoryEntityStore


@pytest.fixture
def store():
    return InMemoryEntityStore()


@pytest.fixture
def lifecycle(store):
    return RecordLifecycle(
        store, password_hash_rounds=FAST_ROUNDS, clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def company_values():
    return {
        "company_name": "Acme Estates",
        "legal_name": "Acme Estates Pvt Ltd",
        "created_by_role": "SUPER_ADMIN",
        "emails": [{"type": "PRIMARY", "email": "ops@acme.com"}],
    }


@pytest.fixture
async def company(lifecycle, company_values):
    return await lifecycle.create(EntityKind.COMPANY, company_values)


# ─── SQL fixtures ────────────────────────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
