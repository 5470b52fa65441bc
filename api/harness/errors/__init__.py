"""Error handling module for the harness API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    QueryValidationError,
    TooManyRequestsError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "QueryValidationError",
    "TooManyRequestsError",
    "create_problem_response",
    "register_exception_handlers"
]
