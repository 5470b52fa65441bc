"""In-memory mock data store."""

from .memory import DataStore, build_store, generate_users, generate_products

__all__ = [
    "DataStore",
    "build_store",
    "generate_users",
    "generate_products"
]
