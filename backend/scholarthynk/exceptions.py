"""
ScholarThynk Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the file viewer.
Why:   Each exception maps to one HTTP status code, so services can raise
       without knowing about HTTP and handlers can respond consistently.
How:   Each exception carries a user-safe message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into JSON.

Exception Hierarchy:
    ScholarThynkError (base)
    ├── ValidationError       → 400 Bad Request (missing/empty/reserved input)
    ├── AuthenticationError   → 401 Unauthorized
    ├── NotFoundError         → 404 Not Found (path segment or item absent)
    ├── ConflictError         → 409 Conflict (sibling name collision)
    └── DatabaseError         → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class ScholarThynkError(Exception):
    """
    Base exception for all ScholarThynk application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client
                  unless the handler explicitly opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ScholarThynkError):
    """
    Raised when client input is missing, empty, or uses the reserved name.

    HTTP: 400 Bad Request. Always raised before the store is touched.
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


class AuthenticationError(ScholarThynkError):
    """Raised when the bearer token is missing, malformed, or fails verification."""

    def __init__(
        self,
        message: str = "Unable to authorize!",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ScholarThynkError):
    """
    Raised when a path segment or a target item does not exist for the caller.

    HTTP: 404 Not Found

    Items owned by someone else are reported exactly like missing ones, so the
    response never reveals whether another user has an item with that name.
    """

    def __init__(
        self,
        resource: str = "item",
        name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if name is not None:
            message = f'{resource.capitalize()} "{name}" was not found'
        ctx = context or {}
        ctx["resource"] = resource
        if name is not None:
            ctx["name"] = name
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.name = name


class ConflictError(ScholarThynkError):
    """Raised when a sibling with the requested name already exists. HTTP: 409."""

    def __init__(
        self,
        message: str = "Item already exists!",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ScholarThynkError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP: 500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (driver message, statement) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
