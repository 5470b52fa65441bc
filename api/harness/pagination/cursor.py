"""Cursor-based pagination keyed on the last seen id."""

from bisect import bisect_right
from operator import attrgetter
from typing import Optional, Sequence, TypeVar

from ..models.pages import CursorPage
from .params import DEFAULT_CURSOR_LIMIT, validate_cursor_window


T = TypeVar("T")


def cursor_paginate(
    sequence: Sequence[T],
    cursor: int = 0,
    limit: int = DEFAULT_CURSOR_LIMIT,
    max_limit: Optional[int] = None
) -> CursorPage[T]:
    """Return the items that follow ``cursor``.

    The sequence must be sorted ascending by ``id``. Because the page starts
    after an id rather than at a position, a cursor stays valid when items
    are appended to the sequence.

    Args:
        sequence: Items sorted ascending by id
        cursor: Last id seen by the client, 0 for the first page
        limit: Maximum number of items to return
        max_limit: Optional cap on limit; unbounded by default

    Returns:
        Page with the items, the cursor for the next call and a has_more flag

    Raises:
        QueryValidationError: If cursor is negative or limit is out of range
    """
    validate_cursor_window(cursor, limit, max_limit)

    start = bisect_right(sequence, cursor, key=attrgetter("id"))
    data = list(sequence[start:start + limit])

    return CursorPage(
        data=data,
        next_cursor=data[-1].id if data else None,
        has_more=len(sequence) - start > limit
    )
