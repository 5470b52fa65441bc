"""Immutable in-memory collections of mock users and products."""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models.records import User, Product, CITIES, CATEGORIES


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataStore:
    """Read-only user and product collections, ordered by id.

    Built once at startup and shared by every request. Records are frozen
    models held in tuples, so query code can slice and filter freely without
    being able to modify what other requests see.
    """

    users: Tuple[User, ...] = ()
    products: Tuple[Product, ...] = ()

    def __post_init__(self):
        for name in ("users", "products"):
            records = getattr(self, name)
            if not isinstance(records, tuple):
                object.__setattr__(self, name, tuple(records))
            ids = [record.id for record in getattr(self, name)]
            if ids != sorted(set(ids)):
                raise ValueError(f"{name} must have unique ids in ascending order")

    def stats(self) -> dict[str, int]:
        return {"users": len(self.users), "products": len(self.products)}


def generate_users(count: int, rng: random.Random) -> Tuple[User, ...]:
    """Generate ``count`` users with sequential ids starting at 1."""
    return tuple(
        User(
            id=i,
            name=f"User {i}",
            email=f"user{i}@example.com",
            age=rng.randint(18, 67),
            city=rng.choice(CITIES)
        )
        for i in range(1, count + 1)
    )


def generate_products(count: int, rng: random.Random) -> Tuple[Product, ...]:
    """Generate ``count`` products with sequential ids starting at 1."""
    return tuple(
        Product(
            id=i,
            name=f"Product {i}",
            price=rng.randint(10, 1009),
            category=rng.choice(CATEGORIES),
            stock=rng.randint(0, 99)
        )
        for i in range(1, count + 1)
    )


def build_store(user_count: int = 100, product_count: int = 50, seed: Optional[int] = None) -> DataStore:
    """Generate a fresh data store.

    Args:
        user_count: Number of users to generate
        product_count: Number of products to generate
        seed: Optional seed for reproducible attribute values

    Returns:
        A populated DataStore
    """
    rng = random.Random(seed)
    store = DataStore(
        users=generate_users(user_count, rng),
        products=generate_products(product_count, rng)
    )
    logger.info(f"Generated mock data store: {store.stats()}")
    return store
