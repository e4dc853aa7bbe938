"""Pagination schemas for cursor-based pagination.

Two input shapes and two output shapes share one cursor mechanism:

1. ``ConnectionArgs`` (``first``/``after``/``last``/``before``), the Relay
   arguments resolvers receive, and ``PaginationParams``, the parsed form
   repositories consume.
2. ``Connection`` (edges + page info + total count), the Relay page, and
   ``PaginatedResult`` (items + total count + page info), the flatter
   shape repository pagination methods return.
"""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from chat_service.core.database.exceptions import InvalidPaginationArgsError
from chat_service.core.pagination.cursor import CursorKey

T = TypeVar("T")

Direction = Literal["forward", "backward"]


class ConnectionArgs(BaseModel):
    """Relay pagination arguments as received from an API layer.

    Field bounds follow the API contract (1..100); whether ``first`` and
    ``last`` (or ``after`` and ``before``) were combined is checked by
    ``parse_pagination_args``.
    """

    model_config = ConfigDict(frozen=True)

    first: int | None = Field(default=None, ge=1, le=100, description="Forward page size")
    after: str | None = Field(default=None, description="Return records after this cursor")
    last: int | None = Field(default=None, ge=1, le=100, description="Backward page size")
    before: str | None = Field(default=None, description="Return records before this cursor")


class PaginationParams(BaseModel):
    """Parsed pagination request.

    Attributes:
        limit: Requested page size (the engine fetches one extra as a probe)
        after_cursor: Lower boundary for forward pagination
        before_cursor: Upper boundary for backward pagination
        direction: "forward" (oldest first) or "backward" (newest first)
    """

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=50, ge=1)
    after_cursor: CursorKey | None = None
    before_cursor: CursorKey | None = None
    direction: Direction = "forward"

    @model_validator(mode="after")
    def check_cursor_direction(self) -> PaginationParams:
        """Reject both cursors at once, or a cursor for the other direction."""
        if self.after_cursor is not None and self.before_cursor is not None:
            raise InvalidPaginationArgsError("Cannot provide both after_cursor and before_cursor")
        if self.direction == "forward" and self.before_cursor is not None:
            raise InvalidPaginationArgsError("before_cursor requires direction=backward", direction=self.direction)
        if self.direction == "backward" and self.after_cursor is not None:
            raise InvalidPaginationArgsError("after_cursor requires direction=forward", direction=self.direction)
        return self


class PageInfo(BaseModel):
    """Pagination metadata following the Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
    """

    model_config = ConfigDict(frozen=True)

    has_previous_page: bool = Field(description="Whether previous items exist")
    has_next_page: bool = Field(description="Whether more items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")


class Edge(BaseModel, Generic[T]):
    """Edge wrapper for paginated items (Relay pattern).

    Attributes:
        node: The record
        cursor: Cursor for this specific record
    """

    model_config = ConfigDict(frozen=True)

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")


class Connection(BaseModel, Generic[T]):
    """Relay Connection page.

    Client navigation:
        # First page
        connection_from_args(candidates, ConnectionArgs(first=10), field)

        # Next page (using end_cursor from previous response)
        ConnectionArgs(first=10, after=page.page_info.end_cursor)

        # Previous page (using start_cursor)
        ConnectionArgs(last=10, before=page.page_info.start_cursor)

    Attributes:
        edges: Records with their cursors, in ascending display order
        page_info: Navigation metadata
        total_count: Size of the full filtered set, independent of the window
    """

    model_config = ConfigDict(frozen=True)

    edges: list[Edge[T]] = Field(default_factory=list, description="List of edges")
    page_info: PageInfo = Field(description="Pagination metadata")
    total_count: int = Field(ge=0, description="Total matching records")

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]

    def to_result(self) -> PaginatedResult[T]:
        """Convert to the items/total_count shape repositories return."""
        return PaginatedResult(
            items=self.nodes,
            total_count=self.total_count,
            page_info=self.page_info,
        )


class PaginatedResult(BaseModel, Generic[T]):
    """Page returned by repository pagination entry points.

    Attributes:
        items: Records of the page in ascending display order
        total_count: Size of the full filtered set
        page_info: Navigation metadata for the page
    """

    model_config = ConfigDict(frozen=True)

    items: list[T] = Field(default_factory=list)
    total_count: int = Field(ge=0)
    page_info: PageInfo


__all__ = [
    "Connection",
    "ConnectionArgs",
    "Direction",
    "Edge",
    "PageInfo",
    "PaginatedResult",
    "PaginationParams",
]
