"""Endpoints for exercising the CORS, security header and rate limit middleware."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request

from ..models.demo import LoginAttempt


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Demo"])


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/", summary="Server status")
async def root() -> Dict[str, str]:
    """Report that the server is up."""
    return {
        "message": "Server is running!",
        "timestamp": _now().isoformat()
    }


@router.get("/api/data", summary="CORS test")
async def cors_data(request: Request) -> Dict[str, str]:
    """Echo the request origin; call it from another origin to test CORS."""
    return {
        "data": "This endpoint is CORS enabled",
        "origin": request.headers.get("origin", "unknown")
    }


@router.post("/api/login", summary="Strict rate limit test")
async def login(attempt: Optional[LoginAttempt] = None) -> Dict[str, Any]:
    """Record a login attempt. This path uses the strict rate limit rule."""
    username = attempt.username if attempt else None
    logger.info(f"Login attempt recorded for {username!r}")
    return {
        "message": "Login attempt recorded",
        "username": username,
        "note": "Try hitting this endpoint 6 times in a minute to see rate limiting in action"
    }


@router.get("/api/headers", summary="Security headers test")
async def security_headers() -> Dict[str, str]:
    """Return a hint; the interesting part is the response headers."""
    return {
        "message": "Check the response headers to see the security headers",
        "tip": "Open DevTools > Network tab to inspect headers"
    }


@router.get("/api/test-general-limit", summary="General rate limit test")
async def general_limit(request: Request) -> Dict[str, Any]:
    """Report the caller's remaining quota under the general rule."""
    result = getattr(request.state, "rate_limit", None)
    if result is None:
        return {
            "message": "General rate limiter is not active for this request",
            "requestsRemaining": None,
            "resetTime": None
        }

    return {
        "message": f"Testing general rate limiter ({result.limit} requests per window)",
        "requestsRemaining": result.remaining,
        "resetTime": (_now() + timedelta(seconds=result.reset_after)).isoformat()
    }
