"""UserRepositorySQLAlchemy against a real PostgreSQL database."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from cdcp.domain.shared.time import utc_now
from cdcp.domain.user import (
    EmailAlreadyExistsError,
    SubscriptionAlreadyExistsError,
    User,
    UserAttribute,
)
from cdcp.infrastructure.persistence.sqlalchemy.models import SubscriptionModel
from cdcp.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from tests.shared.fixtures.factories import ALERT_TYPE, ENGLISH, FRENCH, make_code

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_user_aggregate_round_trip(db_session):
    repo = UserRepositorySQLAlchemy(db_session)
    user = User.create(email="user@example.com", attributes=[UserAttribute("a", "1")])
    user.subscribe(ALERT_TYPE, ENGLISH)
    code = make_code(user, "12345")
    user.add_confirmation_code(code)

    await repo.save(user)
    await db_session.commit()
    db_session.expunge_all()

    found = await repo.find_by_id(user.id)
    assert found.email == "user@example.com"
    assert found.attributes == (UserAttribute("a", "1"),)
    assert found.subscriptions[0].language == ENGLISH
    assert found.confirmation_codes[0].expiry_date == code.expiry_date


@pytest.mark.asyncio
async def test_duplicate_email_is_a_conflict(db_session):
    repo = UserRepositorySQLAlchemy(db_session)
    await repo.save(User.create(email="user@example.com"))
    await db_session.commit()

    with pytest.raises(EmailAlreadyExistsError):
        await repo.save(User.create(email="user@example.com"))


@pytest.mark.asyncio
async def test_database_rejects_second_subscription_to_same_alert_type(db_session):
    repo = UserRepositorySQLAlchemy(db_session)
    user = User.create()
    user.subscribe(ALERT_TYPE, ENGLISH)
    await repo.save(user)
    await db_session.commit()

    db_session.add(
        SubscriptionModel(
            id="duplicate-subscription",
            user_id=user.id,
            alert_type_id=ALERT_TYPE.id,
            language_id=FRENCH.id,
        ),
    )
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_concurrent_subscribe_to_same_alert_type_is_a_conflict(
    db_session,
    async_engine,
):
    repo = UserRepositorySQLAlchemy(db_session)
    user = User.create(email="user@example.com")
    await repo.save(user)
    await db_session.commit()

    session_maker = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_maker() as first, session_maker() as second:
        first_repo = UserRepositorySQLAlchemy(first)
        second_repo = UserRepositorySQLAlchemy(second)
        first_user = await first_repo.find_by_id(user.id)
        second_user = await second_repo.find_by_id(user.id)

        first_user.subscribe(ALERT_TYPE, ENGLISH)
        await first_repo.save(first_user)
        await first.commit()

        second_user.subscribe(ALERT_TYPE, FRENCH)
        with pytest.raises(SubscriptionAlreadyExistsError) as exc_info:
            await second_repo.save(second_user)
        await second.rollback()

    assert exc_info.value.alert_type_code == ALERT_TYPE.code


@pytest.mark.asyncio
async def test_sweep_removes_only_expired_codes(db_session):
    repo = UserRepositorySQLAlchemy(db_session)
    now = utc_now()
    user = User.create()
    live = make_code(user, "11111", expires_in=timedelta(minutes=5), now=now)
    user.add_confirmation_code(live)
    user.add_confirmation_code(
        make_code(user, "22222", expires_in=-timedelta(minutes=5), now=now),
    )
    await repo.save(user)
    await db_session.commit()

    removed = await repo.delete_expired_confirmation_codes(now)
    await db_session.commit()

    assert removed == 1
    assert [c.id for c in await repo.find_confirmation_codes(user.id)] == [live.id]


@pytest.mark.asyncio
async def test_deleting_user_removes_owned_rows(db_session):
    repo = UserRepositorySQLAlchemy(db_session)
    user = User.create(email="user@example.com")
    user.subscribe(ALERT_TYPE, ENGLISH)
    user.add_confirmation_code(make_code(user))
    await repo.save(user)
    await db_session.commit()

    await repo.delete(user.id)
    await db_session.commit()

    assert await repo.find_by_id(user.id) is None
    assert await repo.find_confirmation_codes(user.id) == []
