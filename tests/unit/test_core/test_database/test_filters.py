"""Unit tests for conditional filter evaluation."""
from __future__ import annotations

from datetime import UTC, datetime

import pytest

from chat_service.core.database.exceptions import InvalidFilterError, UnsupportedOperatorError
from chat_service.core.database.filters import (
    ConditionalFilter,
    FilterOperator,
    field_value,
    matches,
    matches_all,
    matches_exact,
)
from chat_service.core.models import Chat, Message

NOW = datetime(2025, 1, 1, tzinfo=UTC)


def make_message(content: str = "Hello world", **overrides) -> Message:
    data = {
        "id": "m1",
        "chat_id": "c1",
        "user_id": "u1",
        "content": content,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return Message(**data)


def cond(key: str, operator: FilterOperator, value=None) -> ConditionalFilter:
    return ConditionalFilter(key=key, operator=operator, value=value)


# ──────────────────────────────────────────────────────────────
# Equality and ordering
# ──────────────────────────────────────────────────────────────


class TestComparisonOperators:
    """Tests for eq/ne/gt/gte/lt/lte."""

    def test_equals_and_not_equals(self):
        message = make_message()

        assert matches(message, cond("chat_id", FilterOperator.EQUALS, "c1"))
        assert not matches(message, cond("chat_id", FilterOperator.EQUALS, "c2"))
        assert matches(message, cond("chat_id", FilterOperator.NOT_EQUALS, "c2"))

    def test_booleans_do_not_equal_numbers(self):
        record = {"is_active": True, "count": 1}

        assert matches(record, cond("is_active", FilterOperator.EQUALS, True))
        assert not matches(record, cond("is_active", FilterOperator.EQUALS, 1))
        assert not matches(record, cond("count", FilterOperator.EQUALS, True))
        assert matches(record, cond("is_active", FilterOperator.NOT_EQUALS, 1))
        assert matches(record, cond("count", FilterOperator.EQUALS, 1.0))

    def test_ordered_comparisons_on_timestamps(self):
        message = make_message()
        earlier = datetime(2024, 12, 31, tzinfo=UTC)

        assert matches(message, cond("created_at", FilterOperator.GREATER_THAN, earlier))
        assert matches(message, cond("created_at", FilterOperator.GREATER_THAN_OR_EQUAL, NOW))
        assert not matches(message, cond("created_at", FilterOperator.LESS_THAN, NOW))
        assert matches(message, cond("created_at", FilterOperator.LESS_THAN_OR_EQUAL, NOW))

    def test_ordered_comparison_against_none_is_false(self):
        """A missing field never satisfies an ordered comparison."""
        message = make_message(reply_to_id=None)

        assert not matches(message, cond("reply_to_id", FilterOperator.GREATER_THAN, "a"))
        assert not matches(message, cond("reply_to_id", FilterOperator.LESS_THAN, "z"))

    def test_incomparable_types_are_false(self):
        message = make_message()

        assert not matches(message, cond("content", FilterOperator.GREATER_THAN, 5))


# ──────────────────────────────────────────────────────────────
# Membership
# ──────────────────────────────────────────────────────────────


class TestMembershipOperators:
    """Tests for in/nin."""

    def test_in_and_not_in(self):
        message = make_message()

        assert matches(message, cond("user_id", FilterOperator.IN, ["u1", "u2"]))
        assert not matches(message, cond("user_id", FilterOperator.IN, ["u3"]))
        assert matches(message, cond("user_id", FilterOperator.NOT_IN, ["u3"]))

    def test_membership_keeps_booleans_apart(self):
        record = {"is_active": True}

        assert not matches(record, cond("is_active", FilterOperator.IN, [1, 0]))
        assert matches(record, cond("is_active", FilterOperator.NOT_IN, [1, 0]))
        assert matches(record, cond("is_active", FilterOperator.IN, [True]))

    def test_non_sequence_operand_never_matches(self):
        message = make_message()

        assert not matches(message, cond("user_id", FilterOperator.IN, "u1"))
        assert not matches(message, cond("user_id", FilterOperator.NOT_IN, None))


# ──────────────────────────────────────────────────────────────
# Text operators
# ──────────────────────────────────────────────────────────────


class TestTextOperators:
    """Tests for like/nlike/contains/startsWith/endsWith."""

    def test_contains_is_case_insensitive_substring(self):
        condition = cond("content", FilterOperator.CONTAINS, "Hello")

        assert matches(make_message("hello world"), condition)
        assert not matches(make_message("goodbye"), condition)

    def test_contains_on_list_field_is_exact_membership(self):
        chat = Chat(id="c1", name="Team", creator_id="u1", member_ids=["u1", "u2"])

        assert matches(chat, cond("member_ids", FilterOperator.CONTAINS, "u2"))
        assert not matches(chat, cond("member_ids", FilterOperator.CONTAINS, "U2"))
        assert not matches(chat, cond("member_ids", FilterOperator.CONTAINS, "u"))

    def test_like_wildcards(self):
        message = make_message("Hello world")

        assert matches(message, cond("content", FilterOperator.LIKE, "hello%"))
        assert matches(message, cond("content", FilterOperator.LIKE, "%WORLD"))
        assert matches(message, cond("content", FilterOperator.LIKE, "h_llo world"))
        assert not matches(message, cond("content", FilterOperator.LIKE, "hello"))

    def test_like_escapes_regex_characters(self):
        message = make_message("price (USD) 1.5")

        assert matches(message, cond("content", FilterOperator.LIKE, "price (usd) 1.5"))
        assert not matches(message, cond("content", FilterOperator.LIKE, "price (usd) 105"))

    def test_not_like(self):
        message = make_message("Hello world")

        assert matches(message, cond("content", FilterOperator.NOT_LIKE, "bye%"))
        assert not matches(message, cond("content", FilterOperator.NOT_LIKE, "%world"))

    def test_like_on_non_string_field_is_false(self):
        message = make_message()

        assert not matches(message, cond("created_at", FilterOperator.LIKE, "%"))

    def test_starts_and_ends_with(self):
        message = make_message("Hello world")

        assert matches(message, cond("content", FilterOperator.STARTS_WITH, "HELLO"))
        assert matches(message, cond("content", FilterOperator.ENDS_WITH, "World"))
        assert not matches(message, cond("content", FilterOperator.STARTS_WITH, "world"))


# ──────────────────────────────────────────────────────────────
# Null checks and combination
# ──────────────────────────────────────────────────────────────


class TestNullOperators:
    """Tests for isNull/isNotNull."""

    def test_null_checks(self):
        reply = make_message(reply_to_id="m0")
        plain = make_message()

        assert matches(plain, cond("reply_to_id", FilterOperator.IS_NULL))
        assert matches(reply, cond("reply_to_id", FilterOperator.IS_NOT_NULL))
        assert not matches(reply, cond("reply_to_id", FilterOperator.IS_NULL))

    def test_absent_field_reads_as_null(self):
        assert matches(make_message(), cond("no_such_field", FilterOperator.IS_NULL))


class TestCombination:
    """Tests for matches_all, matches_exact and field lookup."""

    def test_matches_all_is_logical_and(self):
        message = make_message("Hello world")
        conditions = [
            cond("chat_id", FilterOperator.EQUALS, "c1"),
            cond("content", FilterOperator.CONTAINS, "world"),
        ]

        assert matches_all(message, conditions)
        assert not matches_all(message, [*conditions, cond("user_id", FilterOperator.EQUALS, "u9")])

    def test_empty_condition_list_matches(self):
        assert matches_all(make_message(), [])

    def test_matches_exact(self):
        message = make_message()

        assert matches_exact(message, {"chat_id": "c1", "user_id": "u1"})
        assert not matches_exact(message, {"chat_id": "c1", "user_id": "u2"})
        assert not matches_exact({"is_active": True}, {"is_active": 1})

    def test_field_value_reads_mappings(self):
        assert field_value({"content": "hi"}, "content") == "hi"
        assert field_value({"content": "hi"}, "missing") is None

    def test_matches_is_pure(self):
        message = make_message("Hello")
        condition = cond("content", FilterOperator.LIKE, "%ell%")

        assert [matches(message, condition) for _ in range(3)] == [True, True, True]


class TestUnsupportedOperator:
    """Tests for operators outside the enumeration."""

    def test_unknown_operator_raises(self):
        condition = ConditionalFilter.model_construct(key="content", operator="regex", value=".*")

        with pytest.raises(UnsupportedOperatorError) as exc_info:
            matches(make_message(), condition)

        assert isinstance(exc_info.value, InvalidFilterError)
        assert exc_info.value.operator == "regex"

    def test_operator_values_are_wire_names(self):
        assert FilterOperator("startsWith") is FilterOperator.STARTS_WITH
        assert FilterOperator("nin") is FilterOperator.NOT_IN
