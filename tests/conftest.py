"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolate tests from ambient environment variables
    - Store Fixtures: entity store driven by a deterministic clock
    - Repository Fixtures: one repository per entity over the shared store

When adding new features:
    1. Add fixtures to the appropriate section below
    2. Use @pytest.fixture with clear docstrings
    3. Make fixtures composable (fixtures can depend on other fixtures)
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest

from chat_service.core.database import EntityStore
from chat_service.core.repositories import (
    ChatMemberRepository,
    ChatRepository,
    MessageRepository,
    UserRepository,
)
from chat_service.core.settings import clear_settings_cache

EPOCH = datetime(2025, 1, 1, tzinfo=UTC)


class FakeClock:
    """Clock that moves forward one second every time it is read.

    Every store write therefore gets a distinct, increasing timestamp.
    ``freeze()`` stops the clock to produce timestamp ties.
    """

    def __init__(self, start: datetime = EPOCH, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start
        self.step = step
        self.frozen = False

    def __call__(self) -> datetime:
        now = self.current
        if not self.frozen:
            self.current = self.current + self.step
        return now

    def freeze(self) -> None:
        self.frozen = True

    def resume(self) -> None:
        self.frozen = False


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and ambient PAGINATION_/STORE_/LOG_ variables."""
    for name in (
        "PAGINATION_DEFAULT_LIMIT",
        "PAGINATION_MAX_LIMIT",
        "PAGINATION_ANCHOR_LATEST_PAGE",
        "STORE_ID_PREFIXES",
        "STORE_SLOW_QUERY_THRESHOLD_MS",
        "LOG_LEVEL",
        "LOG_JSON_LOGS",
        "LOG_CONSOLE_ENABLED",
        "LOG_SERVICE_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock starting at 2025-01-01T00:00:00Z."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> Iterator[EntityStore]:
    """Fresh entity store per test, closed afterwards."""
    with EntityStore(clock=clock) as entity_store:
        yield entity_store


# ============================================================================
# Repository Fixtures
# ============================================================================


@pytest.fixture
def user_repo(store: EntityStore) -> UserRepository:
    return UserRepository(store)


@pytest.fixture
def chat_repo(store: EntityStore) -> ChatRepository:
    return ChatRepository(store)


@pytest.fixture
def member_repo(store: EntityStore) -> ChatMemberRepository:
    return ChatMemberRepository(store)


@pytest.fixture
def message_repo(store: EntityStore) -> MessageRepository:
    return MessageRepository(store)
