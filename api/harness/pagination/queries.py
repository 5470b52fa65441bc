"""Search, filter and sort steps applied before pagination.

Each function returns a new list and leaves its input untouched.
"""

import math
from operator import attrgetter
from typing import Callable, Dict, List, Optional, Sequence

from ..errors.problem_details import QueryValidationError
from ..models.records import User, Product
from .params import SORT_FIELDS, SORT_ORDERS


def search_users(users: Sequence[User], term: str) -> List[User]:
    """Case-insensitive substring search over name, email and city.

    An empty term matches every user.
    """
    needle = term.lower()
    if not needle:
        return list(users)
    return [
        user for user in users
        if needle in user.name.lower()
        or needle in user.email.lower()
        or needle in user.city.lower()
    ]


def filter_products(
    products: Sequence[Product],
    category: Optional[str] = None,
    min_price: float = 0,
    max_price: float = math.inf
) -> List[Product]:
    """Keep products priced within [min_price, max_price], optionally in one category.

    The category comparison ignores case.
    """
    wanted = category.lower() if category else None
    return [
        product for product in products
        if min_price <= product.price <= max_price
        and (wanted is None or product.category.lower() == wanted)
    ]


def _name_key(product: Product):
    return (product.name.casefold(), product.name)


SORT_KEYS: Dict[str, Callable[[Product], object]] = {
    "id": attrgetter("id"),
    "name": _name_key,
    "price": attrgetter("price"),
    "stock": attrgetter("stock"),
}


def sort_products(products: Sequence[Product], sort_by: str = "id", order: str = "asc") -> List[Product]:
    """Stable sort of products by one field.

    Numeric fields sort numerically; names sort case-insensitively with the
    exact spelling as tiebreaker. Items with equal keys keep their original
    relative order in both directions.

    Raises:
        QueryValidationError: If sort_by or order is not supported
    """
    if sort_by not in SORT_FIELDS:
        raise QueryValidationError(f"sortBy must be one of: {', '.join(SORT_FIELDS)}", sort_by=sort_by)
    if order not in SORT_ORDERS:
        raise QueryValidationError("order must be 'asc' or 'desc'", order=order)

    return sorted(products, key=SORT_KEYS[sort_by], reverse=order == "desc")
