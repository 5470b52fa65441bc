"""Rate limiting module for the harness API."""

from .token_bucket import TokenBucket, RateLimitResult, RateLimitConfig
from .storage import RateLimitStorage, get_rate_limit_storage, reset_rate_limit_storage
from .middleware import RateLimitMiddleware, GENERAL_RULE, STRICT_RULE

__all__ = [
    "TokenBucket",
    "RateLimitResult",
    "RateLimitConfig",
    "RateLimitStorage",
    "get_rate_limit_storage",
    "reset_rate_limit_storage",
    "RateLimitMiddleware",
    "GENERAL_RULE",
    "STRICT_RULE",
]
