"""In-memory SQLite fixtures for repository tests."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cdcp.infrastructure.persistence.sqlalchemy.models import Base
from tests.shared.fixtures.factories import reference_data_models


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    """Session on a database that already holds the test reference data."""
    async with session_maker() as session:
        session.add_all(reference_data_models())
        await session.commit()
        yield session
