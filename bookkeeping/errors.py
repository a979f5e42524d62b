"""
Error taxonomy for the bookkeeping engine.

Every engine operation reports failure by raising one of these.
Validation, NotFound and Conflict are the caller's to fix;
ConsistencyError is an internal fault (store I/O or a broken
invariant) and is surfaced as a server error.
"""

from pydantic import ValidationError as SchemaValidationError


class BookkeepingError(Exception):
    """Base class for all engine errors."""

    status_code: int = 500
    code: str = "error"


class ValidationError(BookkeepingError, ValueError):
    """Malformed or rule-violating input."""

    status_code = 400
    code = "validation"


class NotFoundError(BookkeepingError):
    """A referenced entity does not exist."""

    status_code = 404
    code = "not_found"


class ConflictError(BookkeepingError):
    """The request violates the current state (duplicate key, already corrected)."""

    status_code = 409
    code = "conflict"


class ConsistencyError(BookkeepingError):
    """Store failure or invariant breach not caused by the caller's input."""

    status_code = 500
    code = "consistency"


def from_schema_error(exc: SchemaValidationError) -> ValidationError:
    """Collapse a pydantic error into an engine ValidationError (first problem only)."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid input")
    if location:
        return ValidationError(f"{location}: {message}")
    return ValidationError(message)
