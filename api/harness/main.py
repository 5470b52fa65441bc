"""Main FastAPI application for the Security & Pagination Harness API."""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .errors import register_exception_handlers
from .middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from .rate_limit import RateLimitMiddleware, get_rate_limit_storage
from .routes import demo_router, users_router, products_router
from .store import DataStore, build_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=get_settings().log_format
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings

    # Configure logging level from settings
    logging.getLogger().setLevel(getattr(logging, settings.log_level))

    logger.info(f"Starting {settings.app_name} with {app.state.store.stats()}")
    logger.info(f"Test endpoints available at http://{settings.host}:{settings.port}/docs")

    yield

    logger.info(f"Shutting down {settings.app_name}")


def create_app(settings: Optional[Settings] = None, store: Optional[DataStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the global ones
        store: Prebuilt data store; generated from settings when omitted

    Returns:
        Configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Demonstrates security headers, CORS and rate limiting middleware "
                    "alongside offset and cursor pagination over in-memory data",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store if store is not None else build_store(
        user_count=settings.user_count,
        product_count=settings.product_count,
        seed=settings.data_seed
    )

    # Middleware added last runs first: logging -> CORS -> security headers -> rate limit
    app.add_middleware(RateLimitMiddleware, settings=settings)

    if settings.security_headers_enabled:
        app.add_middleware(SecurityHeadersMiddleware, hsts_max_age=settings.hsts_max_age)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if settings.log_requests:
        app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    register_exception_handlers(app)

    # Register API routes
    app.include_router(demo_router)
    app.include_router(users_router)
    app.include_router(products_router)

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint with data store sizes."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": VERSION,
            "store": app.state.store.stats(),
            "rate_limit_buckets": get_rate_limit_storage().get_bucket_count()
        }

    @app.get("/live", tags=["Health"])
    async def liveness_check() -> Dict[str, str]:
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": settings.app_name
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "harness.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
