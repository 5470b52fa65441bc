"""Product listing, filter and sort endpoints."""

import logging
import math

from fastapi import APIRouter, Request, Response

from ..dependencies import Store, AppSettings, OffsetQuery, FilterQuery, SortQuery
from ..models.pages import ProductPage, ProductFilterPage, ProductSortPage, AppliedFilters, AppliedSort
from ..pagination import offset_paginate, filter_products, sort_products, set_offset_link_header


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/products",
    tags=["Products"],
    responses={
        400: {"description": "Bad Request - invalid query parameters"},
        429: {"description": "Too Many Requests"}
    }
)


@router.get(
    "",
    response_model=ProductPage,
    response_model_exclude_none=True,
    summary="List products",
    description="Offset pagination over all products, ordered by id."
)
async def list_products(
    store: Store,
    settings: AppSettings,
    params: OffsetQuery,
    request: Request,
    response: Response
) -> ProductPage:
    """List products one page at a time."""
    page = offset_paginate(store.products, params.page, params.limit, settings.max_page_size)
    set_offset_link_header(request, response, page)
    return ProductPage(**dict(page))


@router.get(
    "/filter",
    response_model=ProductFilterPage,
    response_model_exclude_none=True,
    summary="Filter products",
    description="Filter products by category and price range, paginated by offset."
)
async def filter_product_list(
    store: Store,
    settings: AppSettings,
    params: FilterQuery,
    request: Request,
    response: Response
) -> ProductFilterPage:
    """Filter products and paginate the matches.

    The applied filters are echoed back; an unbounded ``maxPrice`` and a
    missing ``category`` are left out of the echo.
    """
    matches = filter_products(store.products, params.category, params.min_price, params.max_price)
    page = offset_paginate(matches, params.page, params.limit, settings.max_page_size)
    set_offset_link_header(request, response, page)

    applied = AppliedFilters(
        category=params.category,
        min_price=params.min_price,
        max_price=params.max_price if math.isfinite(params.max_price) else None
    )

    logger.info(f"Product filter {applied.model_dump()} matched {page.total} products")
    return ProductFilterPage(**dict(page), filters=applied)


@router.get(
    "/sort",
    response_model=ProductSortPage,
    response_model_exclude_none=True,
    summary="Sort products",
    description="Sort products by id, name, price or stock, paginated by offset."
)
async def sort_product_list(
    store: Store,
    settings: AppSettings,
    params: SortQuery,
    request: Request,
    response: Response
) -> ProductSortPage:
    """Sort products and return one page."""
    ordered = sort_products(store.products, params.sort_by, params.order)
    page = offset_paginate(ordered, params.page, params.limit, settings.max_page_size)
    set_offset_link_header(request, response, page)

    logger.info(f"Sorted products by {params.sort_by} {params.order}")
    return ProductSortPage(**dict(page), sort=AppliedSort(sort_by=params.sort_by, order=params.order))
