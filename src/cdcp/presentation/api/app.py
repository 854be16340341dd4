"""HTTP entry point of the notification service.

``create_app`` assembles routers, middleware, exception handlers and
the lifespan that owns the background workers. Resource endpoints live
under ``/api/v1``; ``/health`` and ``/`` stay unversioned.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from cdcp.application.services import ConfirmationCodeService
from cdcp.domain.user import ConfirmationCodeEngine
from cdcp.infrastructure.audit import QueuedAuditSink
from cdcp.infrastructure.persistence.sqlalchemy.init_db import init_database
from cdcp.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from cdcp.infrastructure.scheduling import ConfirmationCodeSweeper
from cdcp.presentation.api.dependencies import get_engine, get_session_maker
from cdcp.presentation.api.exception_handlers import setup_exception_handlers
from cdcp.presentation.api.routers import (
    confirmation_codes_router,
    reference_data_router,
    subscriptions_router,
    users_router,
)
from cdcp.presentation.api.schemas import ErrorResponse, HealthResponse
from cdcp_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers that only speak up on warnings
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite", "asyncpg")


def _configure_logging(log_level: str) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in ("cdcp", "cdcp_config"):
        logging.getLogger(name).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


OPENAPI_TAGS = [
    {
        "name": "Users",
        "description": """Users who receive CDCP notifications.

**Partial updates:**
- `application/json-patch+json` (RFC 6902)
- `application/merge-patch+json` (RFC 7386)

Changing a user's email resets its verified flag.
""",
    },
    {
        "name": "Subscriptions",
        "description": """Alert type subscriptions of a user.

A user holds at most one subscription per alert type. Only the preferred
language (`msLanguageCode`) can be patched.
""",
    },
    {
        "name": "Confirmation Codes",
        "description": """Email verification.

**Flow:**
1. Issue a code for a user (sent to them out of band)
2. Submit the code to `/users/{userId}/email-validations`
3. On success the email is marked verified and outstanding codes are consumed

Expired codes are removed by a periodic background sweep.
""",
    },
    {"name": "Reference Data", "description": "Alert types and languages (read-only)."},
    {"name": "Health", "description": "Liveness check."},
    {"name": "Info", "description": "Service name, version and entry points."},
]

# Error body shared by every v1 endpoint, documented once
ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Token lacks the required role"},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def _build_sweeper(settings: Settings) -> ConfirmationCodeSweeper:
    engine = ConfirmationCodeEngine(
        code_length=settings.confirmation_code_length,
        expiry=settings.confirmation_code_expiry,
    )
    return ConfirmationCodeSweeper(
        session_maker=get_session_maker(),
        service_factory=lambda session: ConfirmationCodeService(
            UserRepositorySQLAlchemy(session),
            engine,
        ),
        interval_seconds=settings.confirmation_code_sweep_interval_seconds,
    )


async def _prepare_database(engine: AsyncEngine) -> None:
    """Create missing tables and seed reference data; exit when unreachable."""
    try:
        await init_database(engine)
    except (ConnectionRefusedError, OSError):
        logger.critical("Database unreachable at startup")
        raise SystemExit(1) from None
    logger.info("Database ready")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the database engine, the audit worker and the code sweeper."""
    settings: Settings = app.state.settings
    logger.info("Starting %s API v%s", settings.app_name, API_VERSION)

    engine = get_engine()
    await _prepare_database(engine)

    audit_sink = QueuedAuditSink(
        session_maker=get_session_maker(),
        max_size=settings.audit_queue_size,
    )
    audit_sink.start()
    app.state.audit_sink = audit_sink

    sweeper = None
    if settings.confirmation_code_sweep_enabled:
        sweeper = _build_sweeper(settings)
        sweeper.start()
    else:
        logger.info("Confirmation code sweeper disabled")

    yield

    logger.info("Stopping %s API", settings.app_name)
    if sweeper is not None:
        await sweeper.stop()
    await audit_sink.stop()
    app.state.audit_sink = None
    await engine.dispose()


def create_v1_router() -> APIRouter:
    router = APIRouter()
    router.include_router(users_router, tags=["Users"])
    router.include_router(subscriptions_router, tags=["Subscriptions"])
    router.include_router(confirmation_codes_router, tags=["Confirmation Codes"])
    router.include_router(reference_data_router, tags=["Reference Data"])
    return router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    settings
        Configuration to use; defaults to ``get_settings()``. Interactive
        docs and the OpenAPI document are only served when ``api_debug``
        is set.
    """
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    docs_enabled = settings.api_debug

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Manage CDCP notification **users**, their **email verification** "
            "and **alert subscriptions**."
        ),
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.audit_sink = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(
        create_v1_router(),
        prefix=API_V1_PREFIX,
        responses=ERROR_RESPONSES,
    )

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy", version=API_VERSION, api_versions=["v1"])

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if docs_enabled else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "users": f"{API_V1_PREFIX}/users",
                "alert_types": f"{API_V1_PREFIX}/alert-types",
                "languages": f"{API_V1_PREFIX}/languages",
                "verify_code": f"{API_V1_PREFIX}/verify-code",
            },
        }

    return app
