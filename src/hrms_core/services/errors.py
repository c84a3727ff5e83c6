"""Services – translate backend failures into kernel errors."""

from __future__ import annotations

from hrms_core.kernel.errors import (
    BaseError,
    ConflictError,
    ConnectionError,
    ExternalServiceError,
    ForbiddenError,
    NotFoundError,
)
from hrms_core.services.backend import BackendError

__all__ = ["PERMANENT_CODES", "is_transient", "map_backend_error"]

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
INSUFFICIENT_PRIVILEGE = "42501"
NO_ROWS = "PGRST116"
NETWORK_ERROR = "NETWORK_ERROR"

# Retrying these cannot change the outcome.
PERMANENT_CODES = frozenset(
    {UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION, INSUFFICIENT_PRIVILEGE, NO_ROWS}
)


def is_transient(exc: BaseException) -> bool:
    """True for backend failures worth retrying."""
    return isinstance(exc, BackendError) and exc.code not in PERMANENT_CODES


def map_backend_error(exc: BackendError, *, message: str | None = None) -> BaseError:
    """Return the kernel error matching *exc*'s backend code.

    *message* overrides the default user-facing text.
    """
    detail = {"backend_code": exc.code, "backend_message": exc.message}
    code = exc.code
    if code == UNIQUE_VIOLATION:
        return ConflictError(message, detail=detail, cause=exc)
    if code == FOREIGN_KEY_VIOLATION:
        return ConflictError(
            message or "Cannot delete - related records exist", detail=detail, cause=exc
        )
    if code == NO_ROWS:
        return NotFoundError(
            "record", message=message or "Record not found", detail=detail, cause=exc
        )
    if code == INSUFFICIENT_PRIVILEGE:
        return ForbiddenError(message, detail=detail, cause=exc)
    if code == NETWORK_ERROR:
        return ConnectionError(message, detail=detail, cause=exc)
    return ExternalServiceError(message, status_code=exc.status, detail=detail, cause=exc)
