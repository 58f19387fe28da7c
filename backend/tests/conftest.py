import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tests.factories import NOW, FakeGeocoder
from venuehub.db.session import Base, get_db
from venuehub.dependencies import current_time, get_geocoder
from venuehub.main import app

# Fixtures defined outside conftest.py are only visible when registered here.
pytest_plugins = ["tests.seeds"]

# Point at Postgres to run against the production dialect, e.g.
# TEST_DATABASE_URL=postgresql+asyncpg://venuehub@localhost:5432/venuehub_test
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./venuehub_test.db")

engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
async_session = async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def geocoder() -> FakeGeocoder:
    """Places the caller in Rijeka with Opatija and Krk inside the search radius."""
    return FakeGeocoder(city="Rijeka", nearby=["Opatija", "Krk"])


@pytest_asyncio.fixture
async def client(db: AsyncSession, geocoder: FakeGeocoder) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the test session, a fake geocoder and a frozen clock."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[current_time] = lambda: NOW

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
