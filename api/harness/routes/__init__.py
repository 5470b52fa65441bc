"""API routes for the harness."""

from .demo import router as demo_router
from .users import router as users_router
from .products import router as products_router

__all__ = ["demo_router", "users_router", "products_router"]
