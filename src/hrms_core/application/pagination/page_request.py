"""Application pagination – PageRequest, Sort, SortDirection, Filter."""
from __future__ import annotations

import dataclasses
from enum import Enum


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclasses.dataclass(frozen=True)
class Sort:
    """Single sort criterion."""
    field: str
    direction: SortDirection = SortDirection.ASC


FILTER_OPERATORS = frozenset({"eq", "neq", "gte", "lte"})


@dataclasses.dataclass(frozen=True)
class Filter:
    """Column comparison applied to a backend query."""
    field: str
    operator: str
    value: object

    def __post_init__(self) -> None:
        if self.operator not in FILTER_OPERATORS:
            raise ValueError(f"unsupported filter operator {self.operator!r}")

    @classmethod
    def eq(cls, field: str, value: object) -> "Filter":
        return cls(field, "eq", value)


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters."""
    page: int = 1
    size: int = 50
    sorts: tuple[Sort, ...] = ()
    filters: tuple[Filter, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.size < 1 or self.size > 1000:
            raise ValueError("size must be between 1 and 1000")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


__all__ = ["FILTER_OPERATORS", "Filter", "PageRequest", "Sort", "SortDirection"]
