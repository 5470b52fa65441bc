"""Token bucket algorithm implementation for rate limiting."""

import math
import time
from typing import NamedTuple
from dataclasses import dataclass


class RateLimitResult(NamedTuple):
    """Result of a rate limit check."""
    allowed: bool
    retry_after: float  # seconds until next allowed request
    limit: int = 0  # bucket capacity
    remaining: int = 0  # whole tokens left after this request
    reset_after: float = 0.0  # seconds until the bucket is full again


@dataclass
class TokenBucket:
    """
    Token bucket implementation for rate limiting.

    The bucket is filled with tokens at a constant rate up to a maximum capacity.
    Each request consumes one token. If no tokens are available, the request is denied.
    """
    capacity: int  # Maximum number of tokens
    refill_rate: float  # Tokens per second
    tokens: float  # Current number of tokens
    last_refill: float  # Last time tokens were added

    @classmethod
    def create(cls, capacity: int, refill_rate: float) -> "TokenBucket":
        """Create a new token bucket with full capacity."""
        return cls(
            capacity=capacity,
            refill_rate=refill_rate,
            tokens=float(capacity),
            last_refill=time.time()
        )

    def _refill_tokens(self, now: float) -> None:
        """Refill tokens based on elapsed time."""
        time_elapsed = now - self.last_refill
        tokens_to_add = time_elapsed * self.refill_rate

        # Update tokens, capped at capacity
        self.tokens = min(self.capacity, self.tokens + tokens_to_add)
        self.last_refill = now

    def _result(self, allowed: bool, retry_after: float) -> RateLimitResult:
        return RateLimitResult(
            allowed=allowed,
            retry_after=retry_after,
            limit=self.capacity,
            remaining=max(0, math.floor(self.tokens)),
            reset_after=(self.capacity - self.tokens) / self.refill_rate
        )

    def consume(self, tokens: int = 1) -> RateLimitResult:
        """
        Attempt to consume tokens from the bucket.

        Args:
            tokens: Number of tokens to consume (default: 1)

        Returns:
            RateLimitResult indicating if request is allowed and retry time
        """
        self._refill_tokens(time.time())

        if self.tokens >= tokens:
            self.tokens -= tokens
            return self._result(True, 0.0)

        # Denied - time until enough tokens have been refilled
        tokens_needed = tokens - self.tokens
        return self._result(False, tokens_needed / self.refill_rate)


class RateLimitConfig:
    """Configuration for rate limiting."""

    @staticmethod
    def parse_rate_string(rate_str: str) -> tuple[int, float]:
        """
        Parse rate string like '60/m' or '100/15m' into capacity and refill rate.

        Args:
            rate_str: Rate string in format 'capacity/period'

        Returns:
            Tuple of (capacity, refill_rate_per_second)

        Raises:
            ValueError: If rate string is invalid
        """
        try:
            capacity_str, period = rate_str.split('/')
            capacity = int(capacity_str)

            units = {'s': 1, 'm': 60, 'h': 3600}
            if period in units:
                period_seconds = units[period]
            elif period and period[-1] in units:
                period_seconds = int(period[:-1]) * units[period[-1]]
            else:
                raise ValueError(f"Unknown period format: {period}")

            if capacity <= 0 or period_seconds <= 0:
                raise ValueError("capacity and period must be positive")

            return capacity, capacity / period_seconds

        except (ValueError, IndexError) as e:
            raise ValueError(f"Invalid rate string '{rate_str}': {e}")

    @staticmethod
    def parse_rate_limits(rate_limits_str: str) -> dict[str, tuple[int, float]]:
        """
        Parse rate limits configuration string.

        Args:
            rate_limits_str: String like "general:100/15m,strict:5/m"

        Returns:
            Dictionary mapping rule names to (capacity, refill_rate)
        """
        limits = {}

        for limit_spec in rate_limits_str.split(','):
            limit_spec = limit_spec.strip()
            if ':' not in limit_spec:
                continue

            rule, rate_str = limit_spec.split(':', 1)
            limits[rule.strip()] = RateLimitConfig.parse_rate_string(rate_str.strip())

        return limits
