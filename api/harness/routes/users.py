"""User listing, search and cursor pagination endpoints."""

import logging

from fastapi import APIRouter, Request, Response

from ..dependencies import Store, AppSettings, OffsetQuery, SearchQuery, CursorQuery
from ..models.pages import UserPage, UserSearchPage, UserCursorPage
from ..pagination import (
    offset_paginate,
    cursor_paginate,
    search_users,
    set_offset_link_header,
    set_cursor_link_header
)


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    responses={
        400: {"description": "Bad Request - invalid pagination parameters"},
        429: {"description": "Too Many Requests"}
    }
)


@router.get(
    "",
    response_model=UserPage,
    response_model_exclude_none=True,
    summary="List users",
    description="Offset pagination over all users, ordered by id."
)
async def list_users(
    store: Store,
    settings: AppSettings,
    params: OffsetQuery,
    request: Request,
    response: Response
) -> UserPage:
    """List users one page at a time."""
    page = offset_paginate(store.users, params.page, params.limit, settings.max_page_size)

    set_offset_link_header(request, response, page)

    logger.info(f"Listed users page {page.current_page}/{page.total_pages}")
    return UserPage(**dict(page))


@router.get(
    "/search",
    response_model=UserSearchPage,
    response_model_exclude_none=True,
    summary="Search users",
    description="Case-insensitive search over name, email and city, paginated by offset."
)
async def search_user_list(
    store: Store,
    settings: AppSettings,
    params: SearchQuery,
    request: Request,
    response: Response
) -> UserSearchPage:
    """Search users and paginate the matches.

    The search term is echoed back as ``searchTerm``.
    """
    matches = search_users(store.users, params.q)
    page = offset_paginate(matches, params.page, params.limit, settings.max_page_size)

    set_offset_link_header(request, response, page)

    logger.info(f"Search '{params.q}' matched {page.total} users")
    return UserSearchPage(**dict(page), search_term=params.q)


@router.get(
    "/cursor",
    response_model=UserCursorPage,
    summary="List users by cursor",
    description="Cursor pagination: returns users whose id is greater than the cursor."
)
async def list_users_by_cursor(
    store: Store,
    settings: AppSettings,
    params: CursorQuery,
    request: Request,
    response: Response
) -> UserCursorPage:
    """List users following the last seen id.

    Pass the returned ``nextCursor`` as ``cursor`` to continue.
    """
    page = cursor_paginate(store.users, params.cursor, params.limit, settings.cursor_max_limit)

    set_cursor_link_header(request, response, page)

    logger.info(f"Cursor {params.cursor} returned {len(page.data)} users (has_more={page.has_more})")
    return UserCursorPage(**dict(page))
