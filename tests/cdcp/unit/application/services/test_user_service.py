"""Unit tests for UserService."""

from unittest.mock import AsyncMock

import pytest

from cdcp.application.services import UserService
from cdcp.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserAttribute,
    UserNotFoundError,
)

TEST_EMAIL = "user@example.com"


class TestUserServiceCreate:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.find_by_email.return_value = None
        self.service = UserService(self.user_repo)

    @pytest.mark.asyncio
    async def test_create_user_saves_new_user(self):
        """A new user is created unverified and persisted."""
        user = await self.service.create_user(
            email=TEST_EMAIL,
            attributes=[UserAttribute("province", "ON")],
        )

        assert user.email == TEST_EMAIL
        assert user.email_verified is False
        assert user.attributes == (UserAttribute("province", "ON"),)
        self.user_repo.save.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_create_user_without_email(self):
        """Email is optional and is not checked for uniqueness when absent."""
        user = await self.service.create_user()

        assert user.email is None
        self.user_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email_conflicts(self):
        self.user_repo.find_by_email.return_value = User.create(email=TEST_EMAIL)

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.create_user(email=TEST_EMAIL)

        self.user_repo.save.assert_not_called()


class TestUserServiceGet:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.service = UserService(self.user_repo)

    @pytest.mark.asyncio
    async def test_get_user_returns_user(self):
        user = User.create(email=TEST_EMAIL)
        self.user_repo.find_by_id.return_value = user

        assert await self.service.get_user(user.id) is user

    @pytest.mark.asyncio
    async def test_get_unknown_user_is_not_found(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError) as exc_info:
            await self.service.get_user("missing")

        assert str(exc_info.value) == "No user with id=[missing] was found"

    @pytest.mark.asyncio
    async def test_blank_user_id_is_rejected(self):
        with pytest.raises(ValueError, match="user_id"):
            await self.service.get_user("")

        self.user_repo.find_by_id.assert_not_called()


class TestUserServiceUpdate:
    def setup_method(self):
        self.user = User.create(email=TEST_EMAIL)
        self.user.mark_email_verified()
        self.user_repo = AsyncMock()
        self.user_repo.find_by_id.return_value = self.user
        self.user_repo.find_by_email.return_value = None
        self.service = UserService(self.user_repo)

    @pytest.mark.asyncio
    async def test_changing_email_resets_verification(self):
        """A new address has to be verified again."""
        updated = await self.service.update_user(
            self.user.id,
            "new@example.com",
            [],
        )

        assert updated.email == "new@example.com"
        assert updated.email_verified is False
        self.user_repo.save.assert_awaited_once_with(self.user)

    @pytest.mark.asyncio
    async def test_same_email_keeps_verification(self):
        updated = await self.service.update_user(
            self.user.id,
            TEST_EMAIL,
            [UserAttribute("a", "b")],
        )

        assert updated.email_verified is True
        assert updated.attributes == (UserAttribute("a", "b"),)
        self.user_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user_conflicts(self):
        self.user_repo.find_by_email.return_value = User.create(email="taken@example.com")

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.update_user(self.user.id, "taken@example.com", [])

        self.user_repo.save.assert_not_called()
        assert self.user.email == TEST_EMAIL

    @pytest.mark.asyncio
    async def test_removing_email(self):
        updated = await self.service.update_user(self.user.id, None, [])

        assert updated.email is None
        assert updated.email_verified is False


class TestUserServiceDelete:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.service = UserService(self.user_repo)

    @pytest.mark.asyncio
    async def test_delete_user(self):
        user = User.create()
        self.user_repo.find_by_id.return_value = user

        await self.service.delete_user(user.id)

        self.user_repo.delete.assert_awaited_once_with(user.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_user_is_not_found(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            await self.service.delete_user("missing")

        self.user_repo.delete.assert_not_called()
