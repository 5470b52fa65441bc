"""Parsing and validation of raw query-string values into typed parameters.

Query values arrive as optional strings. Each ``parse_*`` function applies
the defaults for its endpoint family, rejects out-of-range values with a
``QueryValidationError`` and returns a frozen parameter model, so the query
functions only ever see well-formed input.
"""

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors.problem_details import QueryValidationError


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
DEFAULT_CURSOR_LIMIT = 10

SORT_FIELDS = ("id", "name", "price", "stock")
SORT_ORDERS = ("asc", "desc")

SortField = Literal["id", "name", "price", "stock"]
SortOrder = Literal["asc", "desc"]

PAGE_NOT_POSITIVE = "page and limit must be positive"
LIMIT_TOO_LARGE = "limit exceeds maximum"
CURSOR_INVALID = "cursor must be a non-negative integer"
CURSOR_LIMIT_NOT_POSITIVE = "limit must be positive"


class OffsetParams(BaseModel):
    """Page/limit directive for offset pagination."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)


class SearchParams(OffsetParams):
    """Free-text user search."""

    q: str = ""


class FilterParams(OffsetParams):
    """Product attribute filter."""

    category: Optional[str] = None
    min_price: float = 0
    max_price: float = math.inf


class SortParams(OffsetParams):
    """Product sort directive."""

    sort_by: SortField = "id"
    order: SortOrder = "asc"


class CursorParams(BaseModel):
    """Last-seen id directive for cursor pagination."""

    model_config = ConfigDict(frozen=True)

    cursor: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_CURSOR_LIMIT, ge=1)


def validate_page_window(page: int, limit: int, max_limit: int = MAX_PAGE_SIZE) -> None:
    """Reject a page/limit pair outside the allowed window.

    Raises:
        QueryValidationError: If page or limit is below 1, or limit is above max_limit
    """
    if page < 1 or limit < 1:
        raise QueryValidationError(PAGE_NOT_POSITIVE, page=page, limit=limit)
    if limit > max_limit:
        raise QueryValidationError(LIMIT_TOO_LARGE, limit=limit, max_limit=max_limit)


def validate_cursor_window(cursor: int, limit: int, max_limit: Optional[int] = None) -> None:
    """Reject a cursor/limit pair outside the allowed window.

    Cursor pagination has no upper bound on limit unless max_limit is given.

    Raises:
        QueryValidationError: If cursor is negative, limit is below 1, or limit is above max_limit
    """
    if cursor < 0:
        raise QueryValidationError(CURSOR_INVALID, cursor=cursor)
    if limit < 1:
        raise QueryValidationError(CURSOR_LIMIT_NOT_POSITIVE, limit=limit)
    if max_limit is not None and limit > max_limit:
        raise QueryValidationError(LIMIT_TOO_LARGE, limit=limit, max_limit=max_limit)


def _parse_int(value: Optional[str], default: int, message: str) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise QueryValidationError(message, value=value)


def _parse_price(value: Optional[str], default: float) -> float:
    """Parse a price bound, falling back to the default when it isn't a number."""
    if value is None:
        return default
    try:
        number = float(value.strip())
    except ValueError:
        return default
    if not math.isfinite(number):
        return default
    return number


def parse_offset_params(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE
) -> OffsetParams:
    """Parse page and limit query values.

    Args:
        page: Raw page value (1-indexed)
        limit: Raw page size value
        default_limit: Page size used when limit is absent
        max_limit: Largest accepted page size

    Returns:
        Validated offset parameters

    Raises:
        QueryValidationError: If either value is not a positive integer or limit exceeds max_limit
    """
    page_number = _parse_int(page, 1, PAGE_NOT_POSITIVE)
    page_size = _parse_int(limit, default_limit, PAGE_NOT_POSITIVE)
    validate_page_window(page_number, page_size, max_limit)
    return OffsetParams(page=page_number, limit=page_size)


def parse_search_params(
    q: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE
) -> SearchParams:
    """Parse user search query values."""
    window = parse_offset_params(page, limit, default_limit, max_limit)
    return SearchParams(q=q or "", page=window.page, limit=window.limit)


def parse_filter_params(
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE
) -> FilterParams:
    """Parse product filter query values.

    Price bounds that are absent or not finite numbers fall back to 0 and
    infinity.
    An empty category is treated as absent.
    """
    window = parse_offset_params(page, limit, default_limit, max_limit)
    return FilterParams(
        category=category or None,
        min_price=_parse_price(min_price, 0),
        max_price=_parse_price(max_price, math.inf),
        page=window.page,
        limit=window.limit
    )


def parse_sort_params(
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE
) -> SortParams:
    """Parse product sort query values.

    Raises:
        QueryValidationError: If sort_by is not a sortable field or order is not asc/desc
    """
    window = parse_offset_params(page, limit, default_limit, max_limit)
    field = sort_by or "id"
    direction = (order or "asc").lower()
    if field not in SORT_FIELDS:
        raise QueryValidationError(
            f"sortBy must be one of: {', '.join(SORT_FIELDS)}",
            sort_by=field
        )
    if direction not in SORT_ORDERS:
        raise QueryValidationError("order must be 'asc' or 'desc'", order=order)
    return SortParams(sort_by=field, order=direction, page=window.page, limit=window.limit)


def parse_cursor_params(
    cursor: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = DEFAULT_CURSOR_LIMIT,
    max_limit: Optional[int] = None
) -> CursorParams:
    """Parse cursor pagination query values.

    Raises:
        QueryValidationError: If cursor is not a non-negative integer or limit is not positive
    """
    last_seen = _parse_int(cursor, 0, CURSOR_INVALID)
    page_size = _parse_int(limit, default_limit, CURSOR_LIMIT_NOT_POSITIVE)
    validate_cursor_window(last_seen, page_size, max_limit)
    return CursorParams(cursor=last_seen, limit=page_size)
