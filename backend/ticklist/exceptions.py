"""
Ticklist Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions and error-chain formatting.
Why:   Database failures are re-raised as one application type, so a single
       exception handler can turn all of them into the same opaque 500.
How:   Each exception carries a message and optional context dict. The
       original driver/SQLAlchemy exception is chained with `raise ... from`.
Who:   Raised by the resource layer; caught by the handlers in main.py.

Exception Hierarchy:
    TicklistError (base)
    └── DatabaseError   → 500 Internal Server Error

    Client errors (malformed JSON, missing or unknown fields) never reach this
    hierarchy: FastAPI's request validation answers them with 422.
"""

from typing import Any, Dict, List, Optional


class TicklistError(Exception):
    """
    Base exception for all Ticklist application errors.

    Attributes:
        message:  Description of the failed operation (logged, never returned)
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DatabaseError(TicklistError):
    """
    Raised when a query or insert fails.

    When:    Connection lost, table missing, constraint violation, etc.
    HTTP:    500 Internal Server Error, empty body

    The message is the SQL statement that failed, or "open session" when no
    session could be opened. Connectivity problems and
    foreign-key violations look identical to the caller; the distinction only
    exists in the server log through the chained cause.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def format_error_chain(exc: BaseException) -> str:
    """
    Render an exception and its causes on one line: ``outer: cause: root``.

    Follows ``__cause__`` first, then ``__context__`` unless it was
    suppressed with ``raise ... from None``. Stops on cycles.
    """
    parts: List[str] = []
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(str(current) or type(current).__name__)
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
    return ": ".join(parts)
