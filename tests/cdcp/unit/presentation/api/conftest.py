"""Fixtures for API tests with mocked services.

The application is built with ``create_app`` and every service dependency
is overridden with a mock, so no database is touched. The TestClient is
not used as a context manager; the lifespan (schema setup, audit worker,
sweeper) therefore does not run.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from cdcp.application.ports.audit import AuditSink
from cdcp.application.services import (
    ConfirmationCodeService,
    ReferenceDataService,
    SubscriptionService,
    UserService,
)
from cdcp.infrastructure.security import JWTService
from cdcp.presentation.api.app import API_V1_PREFIX, create_app
from cdcp.presentation.api.config import get_api_settings
from cdcp.presentation.api.dependencies import (
    get_audit_sink,
    get_confirmation_code_service,
    get_db_session,
    get_reference_data_service,
    get_subscription_service,
    get_user_service,
)
from cdcp_config.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only"
REQUIRED_ROLE = "Users.Administer"
TEST_SUBJECT = "test-client"


@pytest.fixture
def api_v1_prefix() -> str:
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and the sweeper off."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        postgres_password=SecretStr("test-password"),
        database_url_override="sqlite+aiosqlite:///:memory:",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        jwt_required_role=REQUIRED_ROLE,
        confirmation_code_sweep_enabled=False,
    )


@pytest.fixture
def db_session_mock():
    return AsyncMock()


@pytest.fixture
def user_service():
    return AsyncMock(spec=UserService)


@pytest.fixture
def subscription_service():
    return AsyncMock(spec=SubscriptionService)


@pytest.fixture
def confirmation_code_service():
    return AsyncMock(spec=ConfirmationCodeService)


@pytest.fixture
def reference_data_service():
    return AsyncMock(spec=ReferenceDataService)


@pytest.fixture
def audit_sink():
    return Mock(spec=AuditSink)


@pytest.fixture
def app(  # NOQA: PLR0913
    api_settings,
    db_session_mock,
    user_service,
    subscription_service,
    confirmation_code_service,
    reference_data_service,
    audit_sink,
):
    app = create_app(api_settings)

    async def _session():
        yield db_session_mock

    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_db_session] = _session
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_subscription_service] = lambda: subscription_service
    app.dependency_overrides[get_confirmation_code_service] = (
        lambda: confirmation_code_service
    )
    app.dependency_overrides[get_reference_data_service] = (
        lambda: reference_data_service
    )
    app.dependency_overrides[get_audit_sink] = lambda: audit_sink
    return app


@pytest.fixture
def test_client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=TEST_JWT_SECRET)


@pytest.fixture
def auth_headers(jwt_service) -> dict:
    token = jwt_service.create_access_token(TEST_SUBJECT, roles=[REQUIRED_ROLE])
    return {"Authorization": f"Bearer {token}"}
