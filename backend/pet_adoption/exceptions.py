"""
Pet Adoption Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for each failure class a request can hit.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by validators, the authorization guard, services and the store
       adapter; caught by global handlers.

Exception Hierarchy:
    PetAdoptionError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AuthenticationError      → 401 Unauthorized (no caller identity)
    ├── PermissionDeniedError    → 403 Forbidden (caller lacks the role)
    ├── NotFoundError            → 404 Not Found
    └── StoreError               → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PetAdoptionError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PetAdoptionError):
    """
    Raised when client input fails validation.

    When:    Missing required field, non-numeric amount, unknown role or status.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing required fields",
            "details": {"field": "requesterEmail"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(PetAdoptionError):
    """
    Raised when a gated route is called without a caller identity.

    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Missing user email for admin verification",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(PetAdoptionError):
    """
    Raised when the caller is unknown or their role lacks the permission.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Access denied. Admins only.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PetAdoptionError):
    """
    Raised when a requested resource does not exist.

    When:    GET by id found nothing, or an id-based update matched no document.
    HTTP:    404 Not Found

    The store returns None / matched_count == 0 for missing documents; services
    convert that into this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message or f"{resource} not found", context=ctx)


class StoreError(PetAdoptionError):
    """
    Raised when a document store operation fails.

    When:    Connection lost, server selection timeout, write error, or the
             store never came up at startup.
    HTTP:    500 Internal Server Error

    The message returned to the client is the operation-level message
    ("Failed to save user"); driver details stay in `context` and the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
