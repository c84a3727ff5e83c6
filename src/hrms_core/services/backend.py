"""Services – Backend port over the hosted relational database."""

from __future__ import annotations

import abc
from typing import Any, Sequence

from hrms_core.application.pagination import Filter, Sort
from hrms_core.kernel.errors import InfrastructureError

Row = dict[str, Any]


class BackendError(InfrastructureError):
    """A backend call failed. ``code`` carries the backend's own error code
    (a Postgres SQLSTATE such as ``23505``, ``PGRST116`` or ``NETWORK_ERROR``).
    """

    default_code = "backend_error"

    def __init__(self, message: str, *, status: int | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status = status


class Backend(abc.ABC):
    """Port: table-level access to the managed backend.

    Implementations enforce row-level security and return plain row dicts.
    Every method raises :class:`BackendError` on failure.
    """

    @abc.abstractmethod
    async def select(
        self,
        table: str,
        *,
        filters: Sequence[Filter] = (),
        sorts: Sequence[Sort] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Row]: ...

    @abc.abstractmethod
    async def count(self, table: str, *, filters: Sequence[Filter] = ()) -> int: ...

    @abc.abstractmethod
    async def insert(self, table: str, rows: Sequence[Row]) -> list[Row]: ...

    @abc.abstractmethod
    async def update(self, table: str, values: Row, *, filters: Sequence[Filter]) -> list[Row]: ...

    @abc.abstractmethod
    async def delete(self, table: str, *, filters: Sequence[Filter]) -> int:
        """Delete matching rows; return how many were removed."""


__all__ = ["Backend", "BackendError", "Row"]
