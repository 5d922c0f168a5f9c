"""Exceptions raised by Volunteer Hub handlers and entities.

The API layer translates these into HTTP responses (see ``volunteerhub.api.app``).
"""

from typing import Any, Dict, Optional


class VolunteerHubError(Exception):
    """Base exception for Volunteer Hub."""

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: str = "VOLUNTEER_HUB_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class DomainValidationError(VolunteerHubError, ValueError):
    """Raised when an entity invariant is violated.

    ``param`` names the constructor/mutator argument that was rejected.
    """

    status_code = 400

    def __init__(self, param: str, message: str):
        self.param = param
        super().__init__(message, "DOMAIN_VALIDATION_ERROR", {"param": param})


class RequestValidationError(VolunteerHubError):
    """Raised when request input cannot be accepted (bad enum value, missing fields)."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class OperationFailedError(VolunteerHubError):
    """Raised when an operation conflicts with current state (duplicate email, missing user)."""

    status_code = 409

    def __init__(self, message: str, error_code: str = "OPERATION_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class EntityNotFoundError(OperationFailedError):
    """Raised when an update targets an entity that does not exist."""

    status_code = 404

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", details)


class InvalidCredentialsError(OperationFailedError):
    """Raised when login fails."""

    status_code = 401

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message, "INVALID_CREDENTIALS")


class ContextUnavailableError(VolunteerHubError):
    """Raised when a handler needs the HTTP response but none was provided.

    This is a hosting misconfiguration, never a user error.
    """

    status_code = 500

    def __init__(self, message: str = "No response available in the request context."):
        super().__init__(message, "CONTEXT_UNAVAILABLE")
