"""
Notekeeper Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for the note CRUD surface.
How:   Each exception class carries a message and optional context dict.
       HTML actions recover NotFound and validation failures locally; the
       global handlers registered in main.py are the fallback and return an
       HTML page or a JSON envelope depending on the request path.
Who:   Raised by schemas and services; caught by routes and global handlers.

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError   → 422 re-rendered form (HTML) / 400 (JSON)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to show)
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


class ValidationError(NotekeeperError):
    """
    Raised when submitted note attributes fail schema validation.

    `field_errors` maps each offending field name to a human-readable
    message so forms can show the error next to the input.

    Example response (JSON API):
        {
            "error": "validation_error",
            "message": "The submitted note is invalid",
            "details": {"field_errors": {"title": "Title is required"}}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.field_errors = dict(field_errors or {})
        ctx = context or {}
        if self.field_errors:
            ctx["field_errors"] = self.field_errors
        super().__init__(message=message, context=ctx)


class NotFoundError(NotekeeperError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; the service converts that
    None into this exception so every action has an explicit NotFound path.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(NotekeeperError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; SQL detail is
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
