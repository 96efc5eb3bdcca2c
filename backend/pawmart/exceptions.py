"""
PawMart Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failure cases the API knows.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       structured JSON error responses.

Exception Hierarchy:
    PawMartError (base)
    ├── DatabaseError            → 500 Internal Server Error
    └── InvalidIdentifierError   → never reaches HTTP (treated as not-found)

Not-found and duplicate-email are NOT exceptions: the services report them
as result variants (NotFound, AlreadyExists) and the routes answer 200.
"""

from typing import Any, Dict, Optional


class PawMartError(Exception):
    """
    Base exception for all PawMart application errors.

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


class DatabaseError(PawMartError):
    """
    Raised when a document store operation fails.

    What:    An insert, query, update or delete did not complete.
    When:    Connection lost, driver error, constraint violation.
    HTTP:    500 Internal Server Error

    The message is the fixed per-operation text ("Failed to fetch users").
    Driver details go in `context` and are only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidIdentifierError(PawMartError):
    """
    Raised by the store when a string is not a valid record identifier.

    Services catch it and answer as if nothing matched.
    """

    def __init__(self, value: Any, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["value"] = str(value)
        super().__init__(message=f"'{value}' is not a valid identifier", context=ctx)
        self.value = value
