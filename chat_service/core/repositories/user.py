"""User repository with lookup and account-state helpers.

Extends BaseRepository with username/email lookups and activation
toggles while keeping the standard CRUD interface.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chat_service.core.database import BaseRepository, FindOptions, QueryBuilder
from chat_service.core.models import USERS, User

if TYPE_CHECKING:
    from collections.abc import Mapping


class UserRepository(BaseRepository[User]):
    """User-specific repository.

    Inherits all standard CRUD operations:
    - create(data) / find_by_id(id) / find_all(options)
    - update(id, patch) / delete(id) / count(filter)

    Example:
        ```python
        users = UserRepository(store)
        user = await users.create_user({"username": "alice", "password": hashed})
        await users.deactivate_user(user.id)
        ```
    """

    model = User
    collection = USERS

    def prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data.setdefault("is_active", True)
        return data

    # ========================================================================
    # Custom Query Methods
    # ========================================================================

    async def find_by_username(self, username: str) -> User | None:
        """Find user by exact username.

        Returns:
            User if found, None otherwise
        """
        user = await self.find_one(QueryBuilder.create().where_equals("username", username).build())
        self._lazy.debug(lambda: f"repo.find_by_username: {username!r} -> {'found' if user else 'not found'}")
        return user

    async def find_by_email(self, email: str) -> User | None:
        """Find user by exact email address.

        Returns:
            User if found, None otherwise
        """
        user = await self.find_one(QueryBuilder.create().where_equals("email", email).build())
        self._lazy.debug(lambda: f"repo.find_by_email: {email!r} -> {'found' if user else 'not found'}")
        return user

    async def get_active_users(self, options: FindOptions | None = None) -> list[User]:
        """Active users, newest first unless ``options`` orders otherwise.

        Example:
            ```python
            page = QueryBuilder.create().limit(20).build()
            active = await repo.get_active_users(page)
            ```
        """
        options = options or FindOptions()
        users = await self.find_all(
            options.merged(
                filter={**(options.filter or {}), "is_active": True},
                order_by=options.order_by or "created_at",
                order_direction=options.order_direction if options.order_by else "desc",
            )
        )
        self._lazy.debug(lambda: f"repo.get_active_users -> {len(users)} items")
        return users

    # ========================================================================
    # Business Logic Helpers
    # ========================================================================

    async def exists_by_username(self, username: str) -> bool:
        """Check if a username is already taken."""
        return await self.find_by_username(username) is not None

    async def create_user(self, data: Mapping[str, Any]) -> User:
        """Create a user; ``is_active`` defaults to True.

        Args:
            data: User fields; ``password`` must already be hashed

        Returns:
            The stored user
        """
        user = await self.create(data)
        self._logger.info(
            "User created",
            extra={"user_id": user.id, "username": user.username, "operation": "user.create"},
        )
        return user

    async def update_password(self, user_id: str, hashed_password: str) -> User | None:
        """Replace the stored password hash."""
        updated = await self.update(user_id, {"password": hashed_password})
        if updated:
            self._logger.info(
                "User password updated",
                extra={"user_id": user_id, "operation": "user.update_password"},
            )
        return updated

    async def deactivate_user(self, user_id: str) -> User | None:
        """Mark a user inactive; None if the user does not exist."""
        return await self._set_active(user_id, active=False)

    async def activate_user(self, user_id: str) -> User | None:
        """Mark a user active; None if the user does not exist."""
        return await self._set_active(user_id, active=True)

    async def _set_active(self, user_id: str, *, active: bool) -> User | None:
        updated = await self.update(user_id, {"is_active": active})
        if updated:
            self._logger.info(
                "User activated" if active else "User deactivated",
                extra={
                    "user_id": user_id,
                    "username": updated.username,
                    "operation": "user.activate" if active else "user.deactivate",
                },
            )
        return updated
