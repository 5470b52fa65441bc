"""FastAPI dependencies for the data store and typed query parameters.

Raw query values are declared as optional strings and handed to the
``parse_*`` functions, so malformed input is reported with the pagination
error messages instead of FastAPI's generic 422 response.
"""

from typing import Annotated, Optional

from fastapi import Depends, Query, Request

from .config import Settings
from .store import DataStore
from .pagination import (
    OffsetParams,
    SearchParams,
    FilterParams,
    SortParams,
    CursorParams,
    parse_offset_params,
    parse_search_params,
    parse_filter_params,
    parse_sort_params,
    parse_cursor_params
)


def get_store(request: Request) -> DataStore:
    """Return the data store built at application startup."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


Store = Annotated[DataStore, Depends(get_store)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]

PageQuery = Annotated[Optional[str], Query(description="Page number, starting at 1")]
LimitQuery = Annotated[Optional[str], Query(description="Items per page")]


def offset_params(settings: AppSettings, page: PageQuery = None, limit: LimitQuery = None) -> OffsetParams:
    return parse_offset_params(
        page, limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size
    )


def search_params(
    settings: AppSettings,
    q: Annotated[Optional[str], Query(description="Case-insensitive search term")] = None,
    page: PageQuery = None,
    limit: LimitQuery = None
) -> SearchParams:
    return parse_search_params(
        q, page, limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size
    )


def filter_params(
    settings: AppSettings,
    category: Annotated[Optional[str], Query(description="Category, matched ignoring case")] = None,
    min_price: Annotated[Optional[str], Query(alias="minPrice", description="Lowest price (default 0)")] = None,
    max_price: Annotated[Optional[str], Query(alias="maxPrice", description="Highest price (default unbounded)")] = None,
    page: PageQuery = None,
    limit: LimitQuery = None
) -> FilterParams:
    return parse_filter_params(
        category, min_price, max_price, page, limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size
    )


def sort_params(
    settings: AppSettings,
    sort_by: Annotated[Optional[str], Query(alias="sortBy", description="id, name, price or stock")] = None,
    order: Annotated[Optional[str], Query(description="asc or desc")] = None,
    page: PageQuery = None,
    limit: LimitQuery = None
) -> SortParams:
    return parse_sort_params(
        sort_by, order, page, limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size
    )


def cursor_params(
    settings: AppSettings,
    cursor: Annotated[Optional[str], Query(description="Last seen id, 0 for the first page")] = None,
    limit: LimitQuery = None
) -> CursorParams:
    return parse_cursor_params(
        cursor, limit,
        default_limit=settings.cursor_default_limit,
        max_limit=settings.cursor_max_limit
    )


OffsetQuery = Annotated[OffsetParams, Depends(offset_params)]
SearchQuery = Annotated[SearchParams, Depends(search_params)]
FilterQuery = Annotated[FilterParams, Depends(filter_params)]
SortQuery = Annotated[SortParams, Depends(sort_params)]
CursorQuery = Annotated[CursorParams, Depends(cursor_params)]
