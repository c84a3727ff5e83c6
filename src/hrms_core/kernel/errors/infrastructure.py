"""Infrastructure errors – the backend could not serve a request."""

from __future__ import annotations

from typing import Any

from hrms_core.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """The backend was unreachable."""

    default_code = "connection_error"
    default_message = "Network error - please check your connection"


class ExternalServiceError(InfrastructureError):
    """The backend answered with a failure the caller cannot fix.

    ``status_code`` is the HTTP status of the backend response, when known.
    """

    default_code = "external_service_error"
    default_message = "Something went wrong. Please try again."

    def __init__(
        self, message: str | None = None, *, status_code: int | None = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code


__all__ = ["ConnectionError", "ExternalServiceError", "InfrastructureError"]
