"""Response envelopes for paginated endpoints."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from .records import User, Product


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageLink(CamelModel):
    """Query parameters that address a neighbouring page."""

    page: int = Field(ge=1)
    limit: int = Field(ge=1)


class OffsetPage(CamelModel, Generic[T]):
    """Envelope for offset (page/limit) pagination."""

    total: int = Field(description="Number of items before slicing")
    total_pages: int = Field(description="ceil(total / limit)")
    current_page: int = Field(description="Requested page (1-indexed)")
    limit: int = Field(description="Page size")
    next: Optional[PageLink] = Field(default=None, description="Present when more items follow")
    previous: Optional[PageLink] = Field(default=None, description="Present when items precede this page")
    data: List[T] = Field(description="Items on this page")


class CursorPage(CamelModel, Generic[T]):
    """Envelope for cursor (last seen id) pagination."""

    data: List[T] = Field(description="Items after the cursor")
    next_cursor: Optional[int] = Field(description="Id of the last returned item")
    has_more: bool = Field(description="Whether items remain after this page")


class AppliedFilters(CamelModel):
    """Filter values actually applied to a product query."""

    category: Optional[str] = None
    min_price: float = 0
    max_price: Optional[float] = Field(default=None, description="null when unbounded")


class AppliedSort(CamelModel):
    """Sort directive actually applied to a product query."""

    sort_by: str
    order: str


class UserPage(OffsetPage[User]):
    """Offset page of users."""


class ProductPage(OffsetPage[Product]):
    """Offset page of products."""


class UserSearchPage(OffsetPage[User]):
    """Offset page of users matching a search term."""

    search_term: str


class ProductFilterPage(OffsetPage[Product]):
    """Offset page of products matching attribute filters."""

    filters: AppliedFilters


class ProductSortPage(OffsetPage[Product]):
    """Offset page of sorted products."""

    sort: AppliedSort


class UserCursorPage(CursorPage[User]):
    """Cursor page of users."""
