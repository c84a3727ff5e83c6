"""Application cache – CacheEntry record and the MISSING sentinel."""
from __future__ import annotations

import dataclasses
from typing import Any, Final

__all__ = ["MISSING", "CacheEntry"]


class _Missing:
    """Marker for "no entry", distinct from a cached ``None``."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final[Any] = _Missing()


@dataclasses.dataclass(frozen=True, slots=True)
class CacheEntry:
    """One stored binding. Replaced wholesale on ``set``, never mutated."""

    value: Any
    expires_at: float | None
    tags: frozenset[str]
    size: int

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and self.expires_at < now
