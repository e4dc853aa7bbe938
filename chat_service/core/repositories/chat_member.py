"""Chat membership repository.

Also performs the membership -> chat join, so callers can list the chats
a user actively belongs to without reaching into another repository.
"""
from __future__ import annotations

from typing import Any, cast

from chat_service.core.database import BaseRepository, FindOptions
from chat_service.core.models import CHAT_MEMBERS, CHATS, Chat, ChatMember, ChatMemberRole


class ChatMemberRepository(BaseRepository[ChatMember]):
    """Membership-specific repository.

    New memberships default to active and take ``joined_at`` from the
    store clock.
    """

    model = ChatMember
    collection = CHAT_MEMBERS

    def prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data.setdefault("is_active", True)
        data.setdefault("joined_at", self._store.now())
        return data

    async def find_by_chat_id(self, chat_id: str) -> list[ChatMember]:
        """Members of a chat, earliest joiner first."""
        return await self.find_all(
            FindOptions(filter={"chat_id": chat_id}, order_by="joined_at", order_direction="asc")
        )

    async def find_by_user_id(self, user_id: str) -> list[ChatMember]:
        """Memberships of a user, most recent join first."""
        return await self.find_all(
            FindOptions(filter={"user_id": user_id}, order_by="joined_at", order_direction="desc")
        )

    async def find_by_chat_and_user(self, chat_id: str, user_id: str) -> ChatMember | None:
        return await self.find_one(FindOptions(filter={"chat_id": chat_id, "user_id": user_id}))

    async def find_active_members(self, chat_id: str) -> list[ChatMember]:
        return await self.find_all(
            FindOptions(
                filter={"chat_id": chat_id, "is_active": True},
                order_by="joined_at",
                order_direction="asc",
            )
        )

    async def find_members_by_role(self, chat_id: str, role: ChatMemberRole) -> list[ChatMember]:
        """Active members of a chat holding ``role``."""
        return await self.find_all(
            FindOptions(
                filter={"chat_id": chat_id, "role": role, "is_active": True},
                order_by="joined_at",
                order_direction="asc",
            )
        )

    async def find_chats_for_member(self, user_id: str) -> list[Chat]:
        """Chats the user is an active member of, most recently updated first.

        Joins active memberships against the chats collection; memberships
        pointing at a deleted chat are skipped.
        """
        memberships = await self.find_all(FindOptions(filter={"user_id": user_id, "is_active": True}))
        chat_ids = {membership.chat_id for membership in memberships}
        chats = [cast("Chat", chat) for chat in self._store.snapshot(CHATS) if chat.id in chat_ids]

        self._lazy.debug(
            lambda: f"repo.find_chats_for_member: {user_id} -> {len(chats)}/{len(chat_ids)} chats"
        )
        return sorted(chats, key=lambda chat: (chat.updated_at, chat.id), reverse=True)
