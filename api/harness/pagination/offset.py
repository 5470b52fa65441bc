"""Offset (page/limit) pagination over in-memory sequences."""

import math
from typing import Sequence, TypeVar

from ..models.pages import OffsetPage, PageLink
from .params import MAX_PAGE_SIZE, validate_page_window


T = TypeVar("T")


def offset_paginate(
    sequence: Sequence[T],
    page: int,
    limit: int,
    max_limit: int = MAX_PAGE_SIZE
) -> OffsetPage[T]:
    """Slice one page out of an ordered sequence.

    Args:
        sequence: Already filtered and sorted items
        page: 1-indexed page number
        limit: Page size, at most max_limit
        max_limit: Largest accepted page size

    Returns:
        Page envelope with navigation links; the source sequence is untouched

    Raises:
        QueryValidationError: If page or limit is out of range
    """
    validate_page_window(page, limit, max_limit)

    total = len(sequence)
    start = (page - 1) * limit
    end = page * limit

    return OffsetPage(
        total=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
        limit=limit,
        next=PageLink(page=page + 1, limit=limit) if end < total else None,
        previous=PageLink(page=page - 1, limit=limit) if start > 0 else None,
        data=list(sequence[start:end])
    )
