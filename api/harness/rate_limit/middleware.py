"""Rate limiting middleware for FastAPI."""

import logging
import math
from typing import Dict, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .token_bucket import RateLimitConfig, RateLimitResult
from .storage import get_rate_limit_storage
from ..config import Settings, get_settings
from ..errors.problem_details import TooManyRequestsError


logger = logging.getLogger(__name__)

GENERAL_RULE = "general"
STRICT_RULE = "strict"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware to enforce per-client rate limits using token buckets.

    This middleware:
    1. Applies the general rule to every path that is not skipped
    2. Applies the strict rule as well on the configured strict paths
    3. Returns 429 with Retry-After header when a limit is exceeded
    4. Adds RateLimit-* headers and stores the result on request.state
    """

    def __init__(self, app, settings: Optional[Settings] = None, skip_paths: Optional[list[str]] = None):
        """
        Initialize rate limiting middleware.

        Args:
            app: The FastAPI application
            settings: Settings to read rules from (defaults to the global settings)
            skip_paths: List of paths to skip rate limiting for
        """
        super().__init__(app)
        settings = settings or get_settings()
        self.skip_paths = set(skip_paths if skip_paths is not None else settings.rate_limit_skip_paths)
        self.strict_paths = set(settings.rate_limit_strict_paths)
        self.trust_proxy = settings.trust_proxy
        self.messages = {
            GENERAL_RULE: settings.rate_limit_message,
            STRICT_RULE: settings.rate_limit_strict_message,
        }

        self.rate_limits = RateLimitConfig.parse_rate_limits(settings.rate_limits)
        self.storage = get_rate_limit_storage()

        logger.info(f"Rate limiting initialized with limits: {self.rate_limits}")

    async def dispatch(self, request: Request, call_next):
        """Process the request through rate limiting middleware."""
        if request.url.path in self.skip_paths:
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        results: Dict[str, RateLimitResult] = {}

        try:
            for rule in self._rules_for(request.url.path):
                capacity, refill_rate = self.rate_limits[rule]
                result = self.storage.consume(f"{rule}:{client_ip}", capacity, refill_rate)
                results[rule] = result

                if not result.allowed:
                    retry_after = max(1, math.ceil(result.retry_after))

                    logger.warning(
                        "Rate limit exceeded",
                        extra={
                            "client_ip": client_ip,
                            "rule": rule,
                            "path": request.url.path,
                            "method": request.method,
                            "retry_after": retry_after
                        }
                    )

                    error = TooManyRequestsError(
                        detail=self.messages.get(rule, "Rate limit exceeded"),
                        retry_after=retry_after,
                        rule=rule
                    )
                    response = error.to_response(request)
                    self._set_rate_limit_headers(response, result)
                    return response

            logger.debug(
                "Rate limit check passed",
                extra={
                    "client_ip": client_ip,
                    "path": request.url.path,
                    "method": request.method
                }
            )

        except Exception as e:
            # Keep serving requests if the limiter itself fails
            logger.error(f"Error in rate limiting middleware: {e}")

        request.state.rate_limit = results.get(GENERAL_RULE)

        response = await call_next(request)

        if results:
            # The most specific rule checked determines the advertised quota
            self._set_rate_limit_headers(response, list(results.values())[-1])
        return response

    def _rules_for(self, path: str) -> List[str]:
        """Rules applying to ``path``, general first."""
        rules = []
        if GENERAL_RULE in self.rate_limits:
            rules.append(GENERAL_RULE)
        if path in self.strict_paths and STRICT_RULE in self.rate_limits:
            rules.append(STRICT_RULE)
        return rules

    @staticmethod
    def _set_rate_limit_headers(response: Response, result: RateLimitResult) -> None:
        response.headers["RateLimit-Limit"] = str(result.limit)
        response.headers["RateLimit-Remaining"] = str(result.remaining)
        response.headers["RateLimit-Reset"] = str(math.ceil(result.reset_after))

    def _get_client_ip(self, request: Request) -> str:
        """
        Extract client IP address from request.

        Proxy headers are only honoured when trust_proxy is enabled.

        Args:
            request: The FastAPI request

        Returns:
            Client IP address, or "unknown"
        """
        if self.trust_proxy:
            forwarded_for = request.headers.get("X-Forwarded-For")
            if forwarded_for:
                # Take the first IP in the chain
                return forwarded_for.split(",")[0].strip()

            real_ip = request.headers.get("X-Real-IP")
            if real_ip:
                return real_ip

        if request.client:
            return request.client.host

        return "unknown"
