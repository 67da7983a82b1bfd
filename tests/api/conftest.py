"""API test fixtures — async DB + FastAPI test client + injectable enrichment.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness probes see the test engine
    - Enrichment disabled unless a test requests fake_enrichment

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Fake enrichment via dependency_overrides: no network, deterministic entries
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from thoughtcode.db.base import Base
from thoughtcode.infrastructure.database import get_db, DatabaseSessionManager
from thoughtcode.infrastructure.enrichment_client import get_enrichment_client
from thoughtcode.models.question import Question
import thoughtcode.infrastructure.database as db_module
from thoughtcode.main import app

from tests.api.fake_enrichment import FakeEnrichmentClient


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
    app.dependency_overrides[get_enrichment_client] = lambda: None

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
def fake_enrichment(client):
    """Install a controllable enrichment client for the list route."""
    fake = FakeEnrichmentClient()
    app.dependency_overrides[get_enrichment_client] = lambda: fake
    return fake


@pytest.fixture
async def seed_questions(test_db):
    """Insert three questions across two where-asked categories."""
    rows = [
        Question(
            title="Two sum", description_url="http://x/1",
            coding_round=True, where_asked="B",
        ),
        Question(
            title="LRU cache", description_url="http://x/2",
            coding_round=True, where_asked="A",
        ),
        Question(
            title="Tell me about yourself", description_url=None,
            coding_round=False, where_asked="C",
        ),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    for row in rows:
        await test_db.refresh(row)
        # Detach so later expire_all() calls don't force sync lazy loads
        test_db.expunge(row)
    return rows
