"""Application cache – CacheStore with TTL, tag groups and a memory ceiling."""
from __future__ import annotations

import inspect
import itertools
import math
import threading
from typing import Any, Awaitable, Callable, Iterable, TypeVar

from hrms_core.application.cache.entry import MISSING, CacheEntry
from hrms_core.application.cache.settings import CacheSettings
from hrms_core.application.cache.sizing import estimate_size
from hrms_core.application.cache.stats import CacheStats
from hrms_core.application.scheduler import Job, Scheduler
from hrms_core.kernel.time import Clock, SystemClock
from hrms_core.observability.logging import get_logger
from hrms_core.observability.metrics import Metrics, NoopMetrics

__all__ = ["CacheStore"]

T = TypeVar("T")
logger = get_logger(__name__)

DEFAULT_MAX_MEMORY = 50 * 1024 * 1024
DEFAULT_TTL = 3600
DEFAULT_CLEANUP_INTERVAL = 60
EVICTION_FRACTION = 0.2


class CacheStore:
    """Process-local key/value cache shared by the data-access services.

    Entries expire after a TTL (``ttl <= 0`` means never), may carry tags for
    group invalidation, and are costed against ``max_memory``. When a write
    pushes the estimate over the ceiling the oldest 20% of entries, by
    insertion order, are evicted in one batch. Reads never reorder entries.

    When a :class:`~hrms_core.application.scheduler.Scheduler` is given, an
    interval job sweeping expired entries is registered on construction and
    removed by :meth:`destroy`.

    Every mutation of the main map and the tag index happens under one lock,
    through :meth:`_remove` for deletions, so a key is indexed under a tag
    exactly when its live entry carries that tag.

    Usage::

        cache = CacheStore(max_memory=10 * 1024 * 1024, default_ttl=300)
        cache.set("attendance:42", row, tags=["attendance"])
        cache.get("attendance:42")
        cache.invalidate_by_tag("attendance")
    """

    def __init__(
        self,
        max_memory: int = DEFAULT_MAX_MEMORY,
        default_ttl: float = DEFAULT_TTL,
        *,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
        cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL,
        metrics: Metrics | None = None,
        name: str = "cache",
    ) -> None:
        self.name = name
        self._max_memory = max_memory
        self._default_ttl = default_ttl
        self._clock: Clock = clock or SystemClock()
        self._lock = threading.RLock()
        self._entries: dict[str, CacheEntry] = {}
        self._tag_index: dict[str, set[str]] = {}
        self._memory_usage = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0

        metrics = metrics or NoopMetrics()
        labels = {"cache": name}
        self._hit_counter = metrics.counter(
            "cache_hits_total", "Lookups that found a live entry", labels
        )
        self._miss_counter = metrics.counter(
            "cache_misses_total", "Lookups that found nothing", labels
        )
        self._eviction_counter = metrics.counter(
            "cache_evictions_total", "Entries removed to stay under max_memory", labels
        )
        self._size_gauge = metrics.gauge("cache_entries", "Live entry count", labels)

        self._scheduler = scheduler
        self._cleanup_job_id: str | None = None
        if scheduler is not None:
            job = Job(
                id=f"{name}:cleanup",
                name=f"{name} expiry sweep",
                handler=self._run_cleanup,
                interval_seconds=cleanup_interval,
            )
            scheduler.add_job(job)
            self._cleanup_job_id = job.id

    @classmethod
    def from_settings(cls, settings: CacheSettings, **kwargs: Any) -> "CacheStore":
        return cls(
            max_memory=settings.max_memory,
            default_ttl=settings.default_ttl,
            cleanup_interval=settings.cleanup_interval,
            **kwargs,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def memory_usage(self) -> int:
        """Current estimated footprint in bytes."""
        return self._memory_usage

    @property
    def tags(self) -> frozenset[str]:
        """Tags currently carried by at least one entry."""
        with self._lock:
            return frozenset(self._tag_index)

    def keys(self) -> list[str]:
        """Keys in insertion order, oldest first (expired entries included)."""
        with self._lock:
            return list(self._entries)

    def keys_for_tag(self, tag: str) -> frozenset[str]:
        with self._lock:
            return frozenset(self._tag_index.get(tag, ()))

    # ------------------------------------------------------------------
    # Key/value operations
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for *key*, or *default*.

        An expired entry is removed on the spot and counted as a miss. The
        stored object itself is returned, not a copy.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_expired(self._clock.timestamp()):
                self._remove(key)
                self._size_gauge.set(len(self._entries))
                entry = None
            if entry is None:
                self._misses += 1
                self._miss_counter.inc()
                return default
            self._hits += 1
            self._hit_counter.inc()
            return entry.value

    def set(
        self,
        key: str,
        value: Any,
        *,
        ttl: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> None:
        """Store *value* under *key*, replacing any previous entry and its tags.

        *ttl* defaults to the store's ``default_ttl``; zero or negative means
        the entry never expires.
        """
        if ttl is None:
            ttl = self._default_ttl
        with self._lock:
            expires_at = self._clock.timestamp() + ttl if ttl > 0 else None
            entry = CacheEntry(
                value=value,
                expires_at=expires_at,
                tags=frozenset(tags or ()),
                size=estimate_size(key, value),
            )
            self._remove(key)
            self._entries[key] = entry
            for tag in entry.tags:
                self._tag_index.setdefault(tag, set()).add(key)
            self._memory_usage += entry.size

            if self._memory_usage > self._max_memory:
                self._evict()
            self._size_gauge.set(len(self._entries))

    def invalidate(self, key: str) -> bool:
        """Remove *key*; return whether an entry was present."""
        with self._lock:
            removed = self._remove(key)
            if removed:
                self._size_gauge.set(len(self._entries))
            return removed

    def invalidate_by_tag(self, tag: str) -> int:
        """Remove every entry carrying *tag*; return how many were removed."""
        with self._lock:
            keys = list(self._tag_index.get(tag, ()))
            removed = sum(1 for key in keys if self._remove(key))
            self._tag_index.pop(tag, None)
            self._size_gauge.set(len(self._entries))
        logger.debug("cache_tag_invalidated", cache=self.name, tag=tag, removed=removed)
        return removed

    def clear(self) -> None:
        """Drop every entry and reset the eviction counter. Hit/miss history is kept."""
        with self._lock:
            self._entries.clear()
            self._tag_index.clear()
            self._memory_usage = 0
            self._evictions = 0
            self._size_gauge.set(0)

    def get_stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                max_memory=self._max_memory,
                size=len(self._entries),
            )

    # ------------------------------------------------------------------
    # Read-through
    # ------------------------------------------------------------------

    async def get_or_compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[T] | T],
        *,
        ttl: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> T:
        """Return the cached value for *key*, or compute, store and return it.

        *producer* may be sync or async. If it raises, the exception
        propagates and nothing is cached. There is no guard against two
        callers missing on the same key at once: both run their producer and
        the later ``set`` wins. Use
        :class:`~hrms_core.application.cache.read_through.SingleFlightReadThrough`
        to share one in-flight computation instead.
        """
        cached = self.get(key, MISSING)
        if cached is not MISSING:
            return cached
        value = producer()
        if inspect.isawaitable(value):
            value = await value
        self.set(key, value, ttl=ttl, tags=tags)
        return value  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Expiry sweep and lifecycle
    # ------------------------------------------------------------------

    def cleanup_expired(self) -> int:
        """Remove every expired entry; return how many were removed."""
        with self._lock:
            now = self._clock.timestamp()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                self._remove(key)
            self._size_gauge.set(len(self._entries))
        if expired:
            logger.debug("cache_expired_swept", cache=self.name, removed=len(expired))
        return len(expired)

    async def _run_cleanup(self) -> None:
        self.cleanup_expired()

    def destroy(self) -> None:
        """Stop the periodic sweep and clear all state."""
        if self._scheduler is not None and self._cleanup_job_id is not None:
            self._scheduler.remove_job(self._cleanup_job_id)
            self._cleanup_job_id = None
        self.clear()

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _remove(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        for tag in entry.tags:
            keys = self._tag_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tag_index[tag]
        self._memory_usage -= entry.size
        return True

    def _evict(self) -> None:
        count = math.ceil(len(self._entries) * EVICTION_FRACTION)
        oldest = list(itertools.islice(self._entries, count))
        for key in oldest:
            self._remove(key)
        self._evictions += len(oldest)
        self._eviction_counter.inc(len(oldest))
        logger.warning(
            "cache_evicted",
            cache=self.name,
            removed=len(oldest),
            memory_usage=self._memory_usage,
            max_memory=self._max_memory,
        )
