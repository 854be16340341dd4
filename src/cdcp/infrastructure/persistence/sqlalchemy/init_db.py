"""Database initialization utilities."""

import logging
from uuid import NAMESPACE_URL, uuid5

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cdcp.infrastructure.persistence.sqlalchemy.models import (
    AlertTypeModel,
    Base,
    LanguageModel,
)

logger = logging.getLogger(__name__)


def _stable_id(kind: str, code: str) -> str:
    return str(uuid5(NAMESPACE_URL, f"cdcp:{kind}:{code}"))


# (code, description)
DEFAULT_ALERT_TYPES = [
    ("CDCP", "Canadian Dental Care Plan updates"),
]

# (code, description, iso_code, ms_locale_code)
DEFAULT_LANGUAGES = [
    ("ENG", "English", "eng", "en-CA"),
    ("FRA", "French", "fra", "fr-CA"),
]


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def seed_reference_data(session: AsyncSession) -> int:
    """Insert the default alert types and languages that are missing.

    Returns the number of rows added. Existing rows are left untouched.
    """
    existing_alert_types = set(
        (await session.execute(select(AlertTypeModel.code))).scalars().all(),
    )
    existing_languages = set(
        (await session.execute(select(LanguageModel.code))).scalars().all(),
    )

    added = 0
    for code, description in DEFAULT_ALERT_TYPES:
        if code not in existing_alert_types:
            session.add(
                AlertTypeModel(
                    id=_stable_id("alert-type", code),
                    code=code,
                    description=description,
                ),
            )
            added += 1

    for code, description, iso_code, ms_locale_code in DEFAULT_LANGUAGES:
        if code not in existing_languages:
            session.add(
                LanguageModel(
                    id=_stable_id("language", code),
                    code=code,
                    description=description,
                    iso_code=iso_code,
                    ms_locale_code=ms_locale_code,
                ),
            )
            added += 1

    await session.flush()
    if added:
        logger.info("Seeded %d reference data row(s)", added)
    return added


async def init_database(engine: AsyncEngine) -> None:
    """Create missing tables and seed reference data."""
    await create_tables(engine)

    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        await seed_reference_data(session)
        await session.commit()
