"""
Custom exceptions for PrintMe Web.

Exception Hierarchy:
    PrintMeError (base, 500)
    ├── ValidationError          - Missing/malformed input (400)
    ├── AuthorizationError       - Wrong admin API key or password (401)
    ├── NotFoundError            - Unknown document/job/payment/... id (404)
    ├── ConflictError            - Operation clashes with current state (409)
    │   ├── InvalidTransitionError - Job status cannot move that way
    │   └── TokenUnavailableError  - Token pool exhausted
    └── UpstreamError            - Payment/geolocation collaborator failed (502)

Usage:
    Services raise these; the API error handler turns them into the
    {"success": false, "error": ...} envelope using status_code.
"""

from typing import Optional, Dict, Any


class PrintMeError(Exception):
    """
    Base exception for all PrintMe errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message (shown to API clients)
            details: Optional dictionary with additional context for logs
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(PrintMeError):
    """
    A required field is missing or a value is malformed or out of range.

    Examples: missing userId, non-numeric latitude, negative pages,
    copies < 1, unknown color mode.
    """

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(message, details)
        self.field = field


class AuthorizationError(PrintMeError):
    """Missing or wrong credentials (admin API key or account password)."""

    status_code = 401

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message)


class NotFoundError(PrintMeError):
    """An entity referenced by id does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        message = f"{entity} not found"
        super().__init__(message, {"entity": entity, "id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(PrintMeError):
    """
    The request conflicts with existing state.

    Raised for duplicate user registration and for operations that are not
    allowed in the entity's current state.
    """

    status_code = 409


class InvalidTransitionError(ConflictError):
    """A print job status change that the lifecycle does not allow."""

    def __init__(self, job_id: int, current: str, requested: str):
        message = f"Cannot move print job from '{current}' to '{requested}'"
        super().__init__(message, {
            "job_id": job_id,
            "current": current,
            "requested": requested,
        })
        self.job_id = job_id
        self.current = current
        self.requested = requested


class TokenUnavailableError(ConflictError):
    """No token of the requested tier is free."""

    def __init__(self, token_type: str):
        message = f"No {token_type} tokens available. Please try again later."
        super().__init__(message, {"token_type": token_type})
        self.token_type = token_type


class UpstreamError(PrintMeError):
    """
    An external collaborator (payment gateway, geolocation) failed.

    The user should be prompted to retry; nothing is retried automatically.
    """

    status_code = 502

    def __init__(self, service: str, message: str):
        super().__init__(message, {
            "service": service,
            "resolution": "Retry the operation",
        })
        self.service = service
