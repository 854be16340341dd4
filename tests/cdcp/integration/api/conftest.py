"""Fixtures for API integration tests on Testcontainers PostgreSQL.

The database is prepared in a separate event loop; the TestClient runs
the application in its own loop and talks to the same container.
"""

import asyncio
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cdcp.application.ports.audit import AuditSink
from cdcp.application.services import ReferenceDataCache
from cdcp.infrastructure.persistence.sqlalchemy.models import Base
from cdcp.infrastructure.security import JWTService
from cdcp.presentation.api.app import API_V1_PREFIX, create_app
from cdcp.presentation.api.config import get_api_settings
from cdcp.presentation.api.dependencies import (
    get_audit_sink,
    get_db_session,
    get_reference_data_cache,
)
from cdcp_config.settings import Settings
from tests.shared.fixtures.database import async_engine, postgres_container
from tests.shared.fixtures.factories import reference_data_models

__all__ = ["async_engine", "postgres_container"]

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only"


def _run(coro) -> None:
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(coro)
    finally:
        loop.close()


async def _reset_database(async_engine) -> None:
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_maker() as session:
        session.add_all(reference_data_models())
        await session.commit()


async def _drop_database(async_engine) -> None:
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def api_v1_prefix() -> str:
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        postgres_password=SecretStr("test-password"),
        api_debug=True,
        confirmation_code_length=6,
        confirmation_code_sweep_enabled=False,
    )


@pytest.fixture
def audit_sink():
    return Mock(spec=AuditSink)


@pytest.fixture
def test_client(async_engine, api_settings, audit_sink):
    _run(_reset_database(async_engine))

    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def _session():
        async with session_maker() as session:
            yield session

    app = create_app(api_settings)
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_db_session] = _session
    app.dependency_overrides[get_reference_data_cache] = lambda: ReferenceDataCache(
        ttl_seconds=0,
    )
    app.dependency_overrides[get_audit_sink] = lambda: audit_sink

    yield TestClient(app)

    _run(_drop_database(async_engine))


@pytest.fixture
def auth_headers() -> dict:
    token = JWTService(TEST_JWT_SECRET).create_access_token(
        "integration-test",
        roles=["Users.Administer"],
    )
    return {"Authorization": f"Bearer {token}"}
