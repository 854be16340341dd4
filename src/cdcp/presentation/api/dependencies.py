"""Request-scoped dependencies of the API.

Everything a router needs arrives through these providers, so tests can
swap any of them with ``app.dependency_overrides``. The ``Annotated``
aliases at the bottom of each section are what routers import.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cdcp.application.patching import PatchProcessor
from cdcp.application.ports.audit import AuditSink
from cdcp.application.services import (
    ConfirmationCodeService,
    ReferenceDataCache,
    ReferenceDataService,
    SubscriptionService,
    UserService,
)
from cdcp.domain.user import ConfirmationCodeEngine
from cdcp.infrastructure.persistence.sqlalchemy.repositories import (
    AlertTypeRepositorySQLAlchemy,
    LanguageRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from cdcp.infrastructure.security import InvalidTokenError, JWTService, TokenPayload
from cdcp.presentation.api.config import get_api_settings
from cdcp_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------


def _ensure_sqlite_directory(url: str) -> None:
    if not url.startswith("sqlite") or "///" not in url:
        return
    path = url.split("///", 1)[1]
    if path and path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Process-wide engine; disposed by the application lifespan."""
    url = get_settings().database_url
    _ensure_sqlite_directory(url)
    return create_async_engine(url, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    # Routers commit explicitly; anything uncommitted is rolled back on close
    async with get_session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authorization
# -----------------------------------------------------------------------------


def get_jwt_service(settings: Settings = Depends(get_api_settings)) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_service: JWTService = Depends(get_jwt_service),
    settings: Settings = Depends(get_api_settings),
) -> TokenPayload:
    """The verified caller; it must hold ``settings.jwt_required_role``.

    Raises
    ------
    HTTPException
        401 without a valid bearer token, 403 without the role
    """
    if credentials is None:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers=_BEARER_CHALLENGE,
        )

    try:
        payload = jwt_service.verify_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_BEARER_CHALLENGE,
        ) from e

    required = settings.jwt_required_role
    if not payload.has_role(required):
        logger.warning("Principal %s lacks role %s", payload.subject, required)
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=f"Role {required} required")

    return payload


Principal = Annotated[TokenPayload, Depends(get_current_principal)]


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_reference_data_cache() -> ReferenceDataCache:
    """Process-wide reference data cache (singleton)."""
    return ReferenceDataCache(
        ttl_seconds=get_settings().reference_data_cache_ttl_seconds,
    )


def get_confirmation_code_engine(
    settings: Settings = Depends(get_api_settings),
) -> ConfirmationCodeEngine:
    return ConfirmationCodeEngine(
        code_length=settings.confirmation_code_length,
        expiry=settings.confirmation_code_expiry,
    )


def get_patch_processor() -> PatchProcessor:
    return PatchProcessor()


def get_reference_data_service(
    session: DBSession,
    cache: ReferenceDataCache = Depends(get_reference_data_cache),
) -> ReferenceDataService:
    return ReferenceDataService(
        alert_type_repository=AlertTypeRepositorySQLAlchemy(session),
        language_repository=LanguageRepositorySQLAlchemy(session),
        cache=cache,
    )


def get_user_service(session: DBSession) -> UserService:
    return UserService(UserRepositorySQLAlchemy(session))


def get_subscription_service(
    session: DBSession,
    reference_data: ReferenceDataService = Depends(get_reference_data_service),
) -> SubscriptionService:
    return SubscriptionService(
        user_repository=UserRepositorySQLAlchemy(session),
        reference_data=reference_data,
    )


def get_confirmation_code_service(
    session: DBSession,
    engine: ConfirmationCodeEngine = Depends(get_confirmation_code_engine),
) -> ConfirmationCodeService:
    return ConfirmationCodeService(
        user_repository=UserRepositorySQLAlchemy(session),
        engine=engine,
    )


def get_audit_sink(request: Request) -> AuditSink:
    """The audit sink started by the application lifespan."""
    sink = getattr(request.app.state, "audit_sink", None)
    if sink is None:
        msg = "Audit sink is not initialized; is the application lifespan running?"
        raise RuntimeError(msg)
    return sink


# Type aliases for injected services
ReferenceData = Annotated[ReferenceDataService, Depends(get_reference_data_service)]
Users = Annotated[UserService, Depends(get_user_service)]
Subscriptions = Annotated[SubscriptionService, Depends(get_subscription_service)]
ConfirmationCodes = Annotated[
    ConfirmationCodeService,
    Depends(get_confirmation_code_service),
]
Patcher = Annotated[PatchProcessor, Depends(get_patch_processor)]
Audit = Annotated[AuditSink, Depends(get_audit_sink)]
