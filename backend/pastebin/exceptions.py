"""
Pastebin Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, middleware and the UI API client.

Exception Hierarchy:
    PastebinError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found (missing, expired or deleted)
    ├── DatabaseError            → 500 Internal Server Error
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── ApiRequestError          → raised client-side for non-404 API failures

Design Decision:
    Not-found is deliberately a single outcome. A paste that never existed,
    one that expired and one that was burned or deleted all raise the same
    NotFoundError with the same message.
"""

from typing import Any, Dict, Optional


class PastebinError(Exception):
    """
    Base exception for all Pastebin application errors.

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


class ValidationError(PastebinError):
    """
    Raised when client input fails a business rule.

    When:    Empty or whitespace-only paste content.
    HTTP:    400 Bad Request

    Schema-level problems (wrong types, missing fields) are still reported by
    FastAPI as 422 before this layer is reached.
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


class NotFoundError(PastebinError):
    """
    Raised when a requested paste is missing, expired, or soft-deleted.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "paste",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(PastebinError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(PastebinError):
    """
    Raised when a client exceeds the per-address request quota.

    HTTP:    429 Too Many Requests
    Includes retry_after: seconds until the current window rolls over.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class ApiRequestError(PastebinError):
    """Raised by the UI API client when the server answers with a non-404 failure."""

    def __init__(
        self,
        message: str = "Request to the paste service failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
