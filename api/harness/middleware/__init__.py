"""HTTP middleware for the harness API."""

from .request_logging import RequestLoggingMiddleware
from .security_headers import SecurityHeadersMiddleware, default_security_headers

__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "default_security_headers",
]
