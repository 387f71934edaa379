"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - seed_enterprise inserts through the same split used by POST /enterprise

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from directory_api.core.enterprise_views import split_complete_enterprise
from directory_api.db.base import Base
from directory_api.infrastructure.database import get_db, DatabaseSessionManager
from directory_api.models.enterprise import Enterprise
from directory_api.models.enterprise_private import EnterprisePrivateFields
import directory_api.infrastructure.database as db_module
from directory_api.main import app
from tests.services.sample_enterprises import as_document_payload


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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed_enterprise(test_db):
    """Insert an enterprise (public + private rows) from an API-shaped payload."""
    async def _seed(payload: dict) -> Enterprise:
        public, private = split_complete_enterprise(
            as_document_payload(payload), ["en", "es"],
        )
        private_row = EnterprisePrivateFields(**private)
        test_db.add(private_row)
        await test_db.flush()
        row = Enterprise(**public, private_info_id=private_row.id)
        test_db.add(row)
        await test_db.commit()
        await test_db.refresh(row)
        return row

    return _seed
