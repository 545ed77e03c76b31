"""
Journal Backend — Custom Exception Hierarchy
============================================

What:  Defines application-specific exceptions for every failure the API reports.
Why:   Each exception maps to exactly one HTTP status code, so handlers can
       short-circuit by raising and the error translator stays exhaustive.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` bodies with the matching status code.
Who:   Raised by services, validators, and the authorization gate.

Exception Hierarchy (closed — nothing else is translated specially):
    JournalError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── AuthenticationError   → 401 Unauthorized
    ├── NotFoundError         → 404 Not Found
    └── DatabaseError         → 500 Internal Server Error (generic message)

    Anything that is not a JournalError is an unexpected error → 500.
"""

from typing import Any, Dict, Optional


class JournalError(Exception):
    """
    Base exception for all Journal application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(JournalError):
    """
    Raised when client input fails validation.

    When:  Missing/empty entry fields, non-numeric entryId, missing sign-up fields,
           duplicate username.
    HTTP:  400 Bad Request
    """

    status_code = 400

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


class AuthenticationError(JournalError):
    """
    Raised when credentials or the session token are missing or invalid.

    When:  Protected route without a bearer token, forged/expired token,
           wrong username or password at sign-in.
    HTTP:  401 Unauthorized (with `WWW-Authenticate: Bearer`)
    """

    status_code = 401

    def __init__(
        self,
        message: str = "authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(JournalError):
    """
    Raised when a requested resource does not exist or is not visible to the caller.

    HTTP:  404 Not Found

    An entry owned by another user is reported exactly like a missing one.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "resource not found",
        resource: Optional[str] = None,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(JournalError):
    """
    Raised when database operations fail unexpectedly.

    When:  Connection lost mid-query, driver errors, constraint violations
           that are not a client mistake.
    HTTP:  500 Internal Server Error

    Security Note:
        The response message is always generic. Driver messages and SQL are
        logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# The only message a client ever sees for a 500
GENERIC_SERVER_ERROR = "An unexpected error occurred. Please try again later."
