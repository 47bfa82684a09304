"""
CascadeBlog Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios the API exposes.
Why:   Services raise typed errors; global handlers in main.py translate them
       into HTTP responses, so no route carries its own try/except.
How:   Each exception carries a user-safe message and an optional context dict
       that is logged but never returned to the client.

Exception Hierarchy:
    CascadeBlogError (base)
    ├── ValidationError       → 400 Bad Request (malformed id, empty update)
    ├── AuthenticationError   → 401 Unauthorized (missing/invalid bearer token)
    ├── ForbiddenError        → 403 Forbidden (principal does not own the resource)
    └── DatabaseError         → 500 Internal Server Error (driver failure)

Not-found is deliberately absent: a missing document is answered with an
empty/null success body.
"""

from typing import Any, Dict, Optional


class CascadeBlogError(Exception):
    """
    Base exception for all CascadeBlog application errors.

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


class ValidationError(CascadeBlogError):
    """
    Raised when client input fails a business rule.

    When:    A path or body identifier is not a valid ObjectId, or an update
             body carries no settable fields.
    HTTP:    400 Bad Request

    Schema violations (missing body fields, wrong JSON types) are left to
    FastAPI, which answers them with 422.
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


class AuthenticationError(CascadeBlogError):
    """
    Raised when a protected route is called without a valid bearer token.

    When:    Authorization header missing, scheme other than Bearer, token
             rejected by the identity provider, or token lacks an email claim.
    HTTP:    401 Unauthorized (with WWW-Authenticate: Bearer)
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(CascadeBlogError):
    """
    Raised when an authenticated principal asks for another user's data.

    When:    GET /wishlist/{userEmail} with an email different from the token's.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have access to this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CascadeBlogError):
    """
    Raised when a MongoDB operation fails.

    When:    Server selection timeout, network error, write error, bad query.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The driver
        error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
