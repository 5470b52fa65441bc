"""Pagination and query engine for the in-memory collections."""

from .params import (
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
from .offset import offset_paginate
from .cursor import cursor_paginate
from .queries import search_users, filter_products, sort_products
from .links import (
    create_link_header,
    offset_link_header,
    cursor_link_header,
    set_offset_link_header,
    set_cursor_link_header
)

__all__ = [
    "OffsetParams",
    "SearchParams",
    "FilterParams",
    "SortParams",
    "CursorParams",
    "parse_offset_params",
    "parse_search_params",
    "parse_filter_params",
    "parse_sort_params",
    "parse_cursor_params",
    "offset_paginate",
    "cursor_paginate",
    "search_users",
    "filter_products",
    "sort_products",
    "create_link_header",
    "offset_link_header",
    "cursor_link_header",
    "set_offset_link_header",
    "set_cursor_link_header"
]
