"""Data models for the harness API."""

from .records import User, Product, CITIES, CATEGORIES
from .demo import LoginAttempt
from .pages import (
    PageLink,
    OffsetPage,
    CursorPage,
    AppliedFilters,
    AppliedSort,
    UserPage,
    ProductPage,
    UserSearchPage,
    ProductFilterPage,
    ProductSortPage,
    UserCursorPage
)

__all__ = [
    "User",
    "Product",
    "CITIES",
    "CATEGORIES",
    "LoginAttempt",
    "PageLink",
    "OffsetPage",
    "CursorPage",
    "AppliedFilters",
    "AppliedSort",
    "UserPage",
    "ProductPage",
    "UserSearchPage",
    "ProductFilterPage",
    "ProductSortPage",
    "UserCursorPage"
]
