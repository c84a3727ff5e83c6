"""Application pagination – Page."""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, Iterable, TypeVar

from hrms_core.application.pagination.page_request import PageRequest

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Page(Generic[T]):
    """One offset page of rows plus the filtered row count.

    ``has_next`` is the backend's ``hasMore``: ``page * size < total``.
    """

    items: list[T]
    total: int
    page: int
    size: int

    @classmethod
    def for_request(cls, items: Iterable[T], total: int, request: PageRequest) -> Page[T]:
        return cls(items=list(items), total=total, page=request.page, size=request.size)

    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 0
        return -(-self.total // self.size)

    @property
    def has_next(self) -> bool:
        return self.page * self.size < self.total

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict[str, Any]:
        """The paginated response shape API handlers return."""
        return {
            "data": self.items,
            "count": self.total,
            "has_more": self.has_next,
            "page": self.page,
        }


__all__ = ["Page"]
