"""
Book API - Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the few error scenarios the
       service has.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error bodies clients expect.
Who:   Raised by the book store, the routes and the middleware.

Exception Hierarchy:
    BookAPIError (base)
    ├── ValidationError          → 400 {"error": message}
    ├── NotFoundError            → 404 {"message": message}
    └── RateLimitExceededError   → 429 {"error": message}

A malformed request body is reported as a ValidationError whose message is
the decoder text built by describe_validation_errors().
"""

from typing import Any, Dict, Iterable, Mapping, Optional


class BookAPIError(Exception):
    """
    Base exception for all Book API errors.

    Attributes:
        message:  Client-facing error description
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookAPIError):
    """
    Raised when client input is rejected before reaching the store.

    When:    A request body that does not decode as a book, or a non-numeric
             path id while STRICT_BOOK_IDS is enabled.
    HTTP:    400 Bad Request
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


class NotFoundError(BookAPIError):
    """
    Raised when a lookup by id matches no stored record.

    When:    GET, PUT or DELETE /books/{id} with an id that is not present.
    HTTP:    404 Not Found

    The message is fixed per resource ("Book not found"); the id that was
    asked for only goes into the context.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class RateLimitExceededError(BookAPIError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header
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


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """
    Render a list of pydantic error dicts as one line of decoder text.

    Each problem becomes "<location>: <message>", with the JSON parser's
    own detail appended for syntax errors when the message lacks it, e.g.
    "title: Input should be a valid string" or
    "Invalid JSON: EOF while parsing a value at line 1 column 0".
    """
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid input")
        detail = (error.get("ctx") or {}).get("error")
        if detail and error.get("type") == "json_invalid" and str(detail) not in message:
            message = f"{message} ({detail})"
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid request body"
