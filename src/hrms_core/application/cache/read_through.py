"""Application cache – single-flight read-through and the @cached decorator."""
from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Awaitable, Callable, Iterable, TypeVar

from hrms_core.application.cache.entry import MISSING
from hrms_core.application.cache.store import CacheStore

__all__ = ["SingleFlightReadThrough", "cached"]

T = TypeVar("T")


class SingleFlightReadThrough:
    """Read-through accessor that de-duplicates concurrent misses per key.

    The first miss on *key* starts the producer in a task owned by the
    reader; every caller missing on the same key, the first included,
    awaits that task through :func:`asyncio.shield`. Cancelling any caller
    therefore only cancels that caller's wait. The task's outcome, value or
    exception, reaches every caller still waiting, and a failure caches
    nothing.
    """

    def __init__(self, store: CacheStore) -> None:
        self._store = store
        self._in_flight: dict[str, asyncio.Task[Any]] = {}

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def get_or_compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[T] | T],
        *,
        ttl: float | None = None,
        tags: Iterable[str] | None = None,
    ) -> T:
        cached_value = self._store.get(key, MISSING)
        if cached_value is not MISSING:
            return cached_value

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.get_running_loop().create_task(
                self._compute(key, producer, ttl, tags), name=f"read-through:{key}"
            )
            self._in_flight[key] = task
        return await asyncio.shield(task)

    async def _compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[T] | T],
        ttl: float | None,
        tags: Iterable[str] | None,
    ) -> T:
        try:
            value = producer()
            if inspect.isawaitable(value):
                value = await value
            self._store.set(key, value, ttl=ttl, tags=tags)
            return value  # type: ignore[return-value]
        finally:
            del self._in_flight[key]


def cached(
    store: CacheStore,
    *,
    key_fn: Callable[..., str] | None = None,
    ttl: float | None = None,
    tags: list[str] | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator: read-through cache an async function's result in *store*.

    *key_fn* receives the same args/kwargs as the wrapped function. The
    wrapper gains ``invalidate(*args, **kwargs)`` which drops the entry for
    that call, so a refetch is ``fn.invalidate(x); await fn(x)``.
    """

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        def make_key(*args: Any, **kwargs: Any) -> str:
            if key_fn is not None:
                return key_fn(*args, **kwargs)
            return f"{fn.__qualname__}:{args}:{sorted(kwargs.items())}"

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await store.get_or_compute(
                make_key(*args, **kwargs), lambda: fn(*args, **kwargs), ttl=ttl, tags=tags
            )

        def invalidate(*args: Any, **kwargs: Any) -> bool:
            return store.invalidate(make_key(*args, **kwargs))

        wrapper.invalidate = invalidate  # type: ignore[attr-defined]
        wrapper.cache_store = store  # type: ignore[attr-defined]
        return wrapper

    return decorator
