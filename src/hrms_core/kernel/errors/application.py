"""Application-layer errors – configuration and access control."""

from __future__ import annotations

from hrms_core.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    default_code = "application_error"


class ForbiddenError(ApplicationError):
    """Row-level security refused the operation for the calling user."""

    default_code = "forbidden"
    default_message = "You do not have permission to perform this action"


__all__ = ["ApplicationError", "ForbiddenError"]
