"""Unit tests for UserRepository."""
from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from chat_service.core.database import QueryBuilder
from chat_service.core.repositories import UserRepository


async def register(repo: UserRepository, username: str, **extra):
    return await repo.create_user({"username": username, "password": "hashed", **extra})


class TestUserCreation:
    """Tests for create_user."""

    async def test_create_user_defaults_active(self, user_repo: UserRepository):
        user = await register(user_repo, "alice", email="alice@example.com")

        assert user.is_active is True
        assert user.email == "alice@example.com"

    async def test_create_user_keeps_explicit_inactive(self, user_repo: UserRepository):
        user = await register(user_repo, "bob", is_active=False)

        assert user.is_active is False

    async def test_create_user_logs(self, user_repo: UserRepository, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.INFO, logger="repository.User"):
            user = await register(user_repo, "carol")

        record = next(r for r in caplog.records if r.getMessage() == "User created")
        assert record.user_id == user.id
        assert record.operation == "user.create"

    async def test_username_is_validated(self, user_repo: UserRepository):
        with pytest.raises(ValidationError):
            await register(user_repo, "")


class TestUserLookups:
    """Tests for username/email lookups."""

    async def test_find_by_username_and_email(self, user_repo: UserRepository):
        alice = await register(user_repo, "alice", email="alice@example.com")

        assert await user_repo.find_by_username("alice") == alice
        assert await user_repo.find_by_username("ALICE") is None
        assert await user_repo.find_by_email("alice@example.com") == alice
        assert await user_repo.find_by_email("nobody@example.com") is None

    async def test_exists_by_username(self, user_repo: UserRepository):
        await register(user_repo, "alice")

        assert await user_repo.exists_by_username("alice") is True
        assert await user_repo.exists_by_username("bob") is False

    async def test_get_active_users_newest_first(self, user_repo: UserRepository):
        alice = await register(user_repo, "alice")
        await register(user_repo, "bob", is_active=False)
        carol = await register(user_repo, "carol")

        assert await user_repo.get_active_users() == [carol, alice]

    async def test_get_active_users_with_options(self, user_repo: UserRepository):
        alice = await register(user_repo, "alice")
        await register(user_repo, "carol")

        options = QueryBuilder.create().order_by("username").limit(1).build()

        assert await user_repo.get_active_users(options) == [alice]


class TestAccountState:
    """Tests for activation and password updates."""

    async def test_deactivate_and_activate(self, user_repo: UserRepository):
        user = await register(user_repo, "alice")

        deactivated = await user_repo.deactivate_user(user.id)
        assert deactivated.is_active is False
        assert await user_repo.get_active_users() == []

        activated = await user_repo.activate_user(user.id)
        assert activated.is_active is True

    async def test_missing_user(self, user_repo: UserRepository):
        assert await user_repo.deactivate_user("missing") is None
        assert await user_repo.activate_user("missing") is None
        assert await user_repo.update_password("missing", "x") is None

    async def test_update_password(self, user_repo: UserRepository):
        user = await register(user_repo, "alice")

        updated = await user_repo.update_password(user.id, "new-hash")

        assert updated.password == "new-hash"
        assert updated.username == "alice"
