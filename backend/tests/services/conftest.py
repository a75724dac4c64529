"""Service test fixtures — in-memory fakes, async SQLite DB, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys on
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - StaticPool: every session shares the single in-memory connection
    - Hook procedure tests use FakeQueryEngine; adapter and route tests use SQLite
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import localesync.infrastructure.database as db_module
import localesync.models  # noqa: F401
from localesync.api.dependencies import RELATION_TARGETS
from localesync.config import Settings
from localesync.db.base import Base
from localesync.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from localesync.infrastructure.locale_service import SqlLocaleService
from localesync.infrastructure.query_engine import SqlQueryEngine
from localesync.main import app
from localesync.services.content_service import ContentService
from localesync.services.lifecycles import build_lifecycles

from tests.services.fake_query_engine import FakeLocaleService, FakeQueryEngine


@pytest.fixture
def fake_engine():
    return FakeQueryEngine()


@pytest.fixture
def fake_locales():
    return FakeLocaleService(["pt", "en", "fr"])


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
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
def sql_engine(test_db):
    return SqlQueryEngine(test_db)


@pytest.fixture
async def sql_locales(test_db):
    service = SqlLocaleService(test_db)
    await service.create("pt", "Português", is_default=True)
    await service.create("en", "English")
    await service.create("fr", "Français")
    return service


@pytest.fixture
def content_service(sql_engine, sql_locales):
    return ContentService(
        sql_engine, sql_locales,
        build_lifecycles(sql_engine, sql_locales, Settings()),
        populate={
            "api::card-musica.card-musica": {
                "localizations": {"select": ["id", "locale"]},
                "categoria_de_musicas": {"select": ["id", "locale"]},
            },
            "api::categoria-de-musica.categoria-de-musica": {
                "localizations": {"select": ["id", "locale"]},
            },
        },
        relations=RELATION_TARGETS,
    )


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
