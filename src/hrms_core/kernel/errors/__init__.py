"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    ├── ApplicationError     (application.py)
    │   └── ForbiddenError
    └── InfrastructureError  (infrastructure.py)
        ├── ConnectionError
        └── ExternalServiceError
"""

from hrms_core.kernel.errors.application import ApplicationError, ForbiddenError
from hrms_core.kernel.errors.base import BaseError
from hrms_core.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from hrms_core.kernel.errors.infrastructure import (
    ConnectionError,
    ExternalServiceError,
    InfrastructureError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConflictError",
    "ConnectionError",
    "DomainError",
    "ExternalServiceError",
    "ForbiddenError",
    "InfrastructureError",
    "NotFoundError",
    "ValidationError",
]
