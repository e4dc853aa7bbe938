"""Cursor pagination over in-memory candidate sets.

Implements the seek method on already-filtered records:
- Records are ordered by ``(ordering field, id)`` so ties on the timestamp
  still give a total, stable order
- ``after`` keeps records strictly after the cursor key (ascending);
  ``before`` keeps records strictly before it (descending)
- One record beyond the page size is fetched as a "has more" probe and
  dropped before edges are built

Per call: candidates -> cursor-filtered -> sliced (limit + 1) -> page.

Example:
    from chat_service.core.pagination import ConnectionArgs, connection_from_args

    page = connection_from_args(
        messages,
        ConnectionArgs(first=20, after=cursor_from_request),
        field="created_at",
    )
    for edge in page.edges:
        print(edge.node.content, edge.cursor)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chat_service.core.database.exceptions import InvalidPaginationArgsError
from chat_service.core.pagination.cursor import CursorCodec, sort_key
from chat_service.core.pagination.schemas import (
    Connection,
    ConnectionArgs,
    Edge,
    PageInfo,
    PaginationParams,
)
from chat_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

_lazy = get_lazy_logger("chat_service.pagination")


def parse_pagination_args(
    args: ConnectionArgs,
    *,
    default_limit: int | None = None,
    max_limit: int | None = None,
) -> PaginationParams:
    """Translate Relay arguments into ``PaginationParams``.

    ``after`` only applies to forward pagination and ``before`` only to
    backward pagination; with neither ``first`` nor ``last`` the default
    page size is used going forward.

    Args:
        args: Raw connection arguments
        default_limit: Page size when neither ``first`` nor ``last`` is given;
            defaults to ``PaginationSettings.default_limit``
        max_limit: Upper bound applied to ``first``/``last``; defaults to
            ``PaginationSettings.max_limit``

    Raises:
        InvalidPaginationArgsError: ``first`` with ``last``, or ``after`` with ``before``
        MalformedCursorError: a cursor cannot be decoded
    """
    if args.first is not None and args.last is not None:
        raise InvalidPaginationArgsError(
            "Cannot provide both first and last", first=args.first, last=args.last
        )
    if args.after is not None and args.before is not None:
        raise InvalidPaginationArgsError(
            "Cannot provide both after and before", after=args.after, before=args.before
        )

    if default_limit is None or max_limit is None:
        from chat_service.core.settings import get_pagination_settings

        settings = get_pagination_settings()
        default_limit = settings.default_limit if default_limit is None else default_limit
        max_limit = settings.max_limit if max_limit is None else max_limit

    if args.first is not None:
        return PaginationParams(
            limit=min(args.first, max_limit),
            after_cursor=CursorCodec.decode(args.after) if args.after else None,
            direction="forward",
        )

    if args.last is not None:
        return PaginationParams(
            limit=min(args.last, max_limit),
            before_cursor=CursorCodec.decode(args.before) if args.before else None,
            direction="backward",
        )

    return PaginationParams(limit=min(default_limit, max_limit), direction="forward")


def seek[T](candidates: Iterable[T], params: PaginationParams, field: str) -> list[T]:
    """Order candidates, apply the cursor boundary and cut ``limit + 1`` records.

    Forward windows are ascending and start strictly after
    ``params.after_cursor``; backward windows are descending and start
    strictly before ``params.before_cursor``.
    """
    backward = params.direction == "backward"
    ordered = sorted(candidates, key=lambda record: sort_key(record, field), reverse=backward)

    if not backward and params.after_cursor is not None:
        boundary = params.after_cursor.as_tuple()
        ordered = [r for r in ordered if sort_key(r, field) > boundary]
    elif backward and params.before_cursor is not None:
        boundary = params.before_cursor.as_tuple()
        ordered = [r for r in ordered if sort_key(r, field) < boundary]

    return ordered[: params.limit + 1]


def build_page[T](
    window: Sequence[T],
    params: PaginationParams,
    total_count: int,
    field: str,
    *,
    anchor_latest: bool = False,
) -> Connection[T]:
    """Turn a ``seek`` window into a page with edges and page info.

    Args:
        window: Output of ``seek`` (may hold the extra probe record)
        params: Parsed pagination request
        total_count: Size of the filtered set before cursor trimming
        field: Ordering field the cursors are keyed on
        anchor_latest: Treat an un-cursored forward page as the latest page:
            ``has_next_page`` is False and ``has_previous_page`` reports
            whether the probe existed

    Returns:
        Connection with edges in ascending display order
    """
    has_more = len(window) > params.limit
    rows = list(window[: params.limit])

    if params.direction == "backward":
        rows.reverse()
        has_previous = has_more
        has_next = params.before_cursor is not None
    elif params.after_cursor is None and anchor_latest:
        # Un-cursored forward page is the newest window: nothing after it
        has_next = False
        has_previous = has_more
    else:
        has_next = has_more
        has_previous = params.after_cursor is not None

    edges = [Edge(node=row, cursor=CursorCodec.for_record(row, field)) for row in rows]
    page_info = PageInfo(
        has_previous_page=has_previous,
        has_next_page=has_next,
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
    )

    _lazy.debug(
        lambda: f"pagination.page: {params.direction}(limit={params.limit}, field={field}) "
        f"-> {len(edges)}/{total_count} items, has_next={has_next}, has_prev={has_previous}"
    )
    return Connection(edges=edges, page_info=page_info, total_count=total_count)


def paginate[T](
    candidates: Iterable[T],
    params: PaginationParams,
    field: str,
    *,
    total_count: int | None = None,
    anchor_latest: bool = False,
) -> Connection[T]:
    """Seek and page in one step.

    ``total_count`` defaults to the number of candidates, i.e. the whole
    filtered set before any cursor trimming.
    """
    records = list(candidates)
    window = seek(records, params, field)
    count = len(records) if total_count is None else total_count
    return build_page(window, params, count, field, anchor_latest=anchor_latest)


def connection_from_args(
    candidates: Iterable[Any],
    args: ConnectionArgs,
    field: str,
    *,
    total_count: int | None = None,
    anchor_latest: bool | None = None,
) -> Connection[Any]:
    """Resolver-facing entry: parse Relay arguments, then paginate.

    An un-cursored ``first=N`` page is treated as the latest page by
    default (``PaginationSettings.anchor_latest_page``): ``has_next_page`` is
    False and ``has_previous_page`` reports whether more than N records
    exist. Backward pagination is not anchored.

    Raises:
        InvalidPaginationArgsError: conflicting arguments
        MalformedCursorError: a cursor cannot be decoded
    """
    from chat_service.core.settings import get_pagination_settings

    settings = get_pagination_settings()
    params = parse_pagination_args(
        args, default_limit=settings.default_limit, max_limit=settings.max_limit
    )
    if anchor_latest is None:
        anchor_latest = settings.anchor_latest_page
    return paginate(
        candidates,
        params,
        field,
        total_count=total_count,
        anchor_latest=anchor_latest,
    )


__all__ = [
    "build_page",
    "connection_from_args",
    "paginate",
    "parse_pagination_args",
    "seek",
]
