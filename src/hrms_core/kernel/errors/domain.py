"""Domain errors – business rule violations raised by the services layer."""

from __future__ import annotations

from typing import Any

from hrms_core.kernel.errors.base import BaseError


class DomainError(BaseError):
    """A business rule was violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input failed validation before reaching the backend."""

    default_code = "validation_error"

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.field = field


class NotFoundError(DomainError):
    """The requested record does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        entity: str,
        entity_id: object | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        if message is None:
            message = f"{entity} not found"
            if entity_id is not None:
                message = f"{entity} '{entity_id}' not found"
        super().__init__(message, **kwargs)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(DomainError):
    """The write collides with existing state (duplicate, FK violation, …)."""

    default_code = "conflict"
    default_message = "This record already exists"


__all__ = ["ConflictError", "DomainError", "NotFoundError", "ValidationError"]
