"""Application cache – CacheStats snapshot."""
from __future__ import annotations

import dataclasses
from typing import Any

__all__ = ["CacheStats"]


@dataclasses.dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters reported by :meth:`CacheStore.get_stats`."""

    hits: int
    misses: int
    evictions: int
    max_memory: int
    size: int

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Percentage of lookups that hit, rounded to two decimals (0.0 before any lookup)."""
        if self.lookups == 0:
            return 0.0
        return round(self.hits / self.lookups * 100, 2)

    @property
    def hit_ratio(self) -> str:
        return f"{self.hits}/{self.lookups}"

    def to_dict(self) -> dict[str, Any]:
        """Stable plain-dict shape polled by the operations dashboard."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "max_memory": self.max_memory,
            "size": self.size,
            "hit_rate": self.hit_rate,
            "hit_ratio": self.hit_ratio,
        }
