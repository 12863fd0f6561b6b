"""
Core module for PrintMe Web.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy mapped to HTTP status codes
"""

from .exceptions import (
    PrintMeError,
    ValidationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    InvalidTransitionError,
    TokenUnavailableError,
    UpstreamError,
)

__all__ = [
    "PrintMeError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "InvalidTransitionError",
    "TokenUnavailableError",
    "UpstreamError",
]
