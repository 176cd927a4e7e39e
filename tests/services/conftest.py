"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session factory
    - get_reference_data overridden to read the path from the reference_path fixture
    - db_manager patched so the readiness check sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection,
      so rows written through the client are visible to test_db
    - reference_path defaults to the 5-state fixture; modules needing the full
      dataset override the fixture with None
"""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import states_api.infrastructure.database as db_module
from states_api.api.dependencies import get_reference_data
from states_api.core.reference_data import load_reference_data
from states_api.db.base import Base
from states_api.infrastructure.database import DatabaseSessionManager, get_db
from states_api.infrastructure.fact_store import SqlFactStore
from states_api.main import app
from states_api.models.state_funfacts import StateFunFacts

SAMPLE_PATH = Path(__file__).parent.parent / "fixtures" / "states_sample.json"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def store(test_db):
    return SqlFactStore(test_db)


@pytest.fixture
def reference_path():
    return SAMPLE_PATH


@pytest.fixture
async def client(test_engine, test_session_factory, reference_path):
    """FastAPI test client with DB and reference data dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reference_data] = (
        lambda: load_reference_data(reference_path)
    )

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
async def seed_facts(test_db):
    """Insert stored fun facts directly: {code: [facts]} → committed rows."""
    async def _seed(entries: dict[str, list[str]]):
        for code, facts in entries.items():
            test_db.add(StateFunFacts(state_code=code, funfacts=list(facts)))
        await test_db.commit()

    return _seed
