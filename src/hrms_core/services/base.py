"""Services – BaseService: retry, error mapping, pagination and caching helpers."""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Awaitable, Callable, Iterable, Sequence, TypeVar

import tenacity

from hrms_core.application.cache import CacheStore
from hrms_core.application.pagination import Page, PageRequest
from hrms_core.kernel.time import Clock, SystemClock
from hrms_core.observability.logging import get_logger
from hrms_core.resilience.retry import TenacityRetryPolicy
from hrms_core.services.backend import Backend, BackendError, Row
from hrms_core.services.errors import is_transient, map_backend_error
from hrms_core.services.settings import ServiceSettings

__all__ = ["BaseService"]

T = TypeVar("T")
U = TypeVar("U")
logger = get_logger(__name__)


class BaseService:
    """Foundation for the data-access services.

    Holds the backend port and the shared :class:`CacheStore` (one instance
    per process, injected by the composition root). Backend calls go through
    :meth:`_with_retry`; reads go through :meth:`_cached` and writes
    invalidate the keys and tags they affect.
    """

    def __init__(
        self,
        backend: Backend,
        cache: CacheStore,
        *,
        settings: ServiceSettings | None = None,
        clock: Clock | None = None,
        retry: TenacityRetryPolicy | None = None,
    ) -> None:
        self._backend = backend
        self._cache = cache
        self._settings = settings or ServiceSettings()
        self._clock: Clock = clock or SystemClock()
        self._retry = retry or TenacityRetryPolicy(
            max_attempts=self._settings.max_retries,
            wait=tenacity.wait_exponential(multiplier=self._settings.retry_delay),
            retry=tenacity.retry_if_exception(is_transient),
        )

    async def _with_retry(self, fn: Callable[[], Awaitable[T]], operation: str) -> T:
        """Run *fn*, retrying transient backend failures.

        Backend errors surface as kernel errors; anything else raised by
        *fn* propagates untouched.
        """
        try:
            return await self._retry.execute_async(fn)
        except BackendError as exc:
            logger.error(
                "backend_operation_failed", operation=operation, code=exc.code, error=exc.message
            )
            if is_transient(exc):
                raise map_backend_error(
                    exc, message=f"{operation} failed after {self._retry.max_attempts} retries"
                ) from exc
            raise map_backend_error(exc) from exc

    async def _cached(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        *,
        tags: Iterable[str] = (),
        ttl: float | None = None,
    ) -> T:
        return await self._cache.get_or_compute(
            key,
            producer,
            ttl=self._settings.query_ttl if ttl is None else ttl,
            tags=tags,
        )

    async def fetch_paginated(self, table: str, request: PageRequest | None = None) -> Page[Row]:
        """Fetch one page of *table*. Pages are not cached."""
        request = request or PageRequest()

        async def _fetch() -> Page[Row]:
            rows = await self._backend.select(
                table,
                filters=request.filters,
                sorts=request.sorts,
                limit=request.size,
                offset=request.offset,
            )
            total = await self._backend.count(table, filters=request.filters)
            return Page.for_request(rows, total, request)

        return await self._with_retry(_fetch, f"Fetch {table} page {request.page}")

    async def batch_operation(
        self,
        items: Sequence[U],
        operation: Callable[[list[U]], Awaitable[T]],
        batch_size: int | None = None,
    ) -> list[T]:
        """Split *items* into chunks and run *operation* on each concurrently."""
        size = batch_size or self._settings.batch_size
        batches = [list(items[i : i + size]) for i in range(0, len(items), size)]
        label = f"Batch operation ({len(batches)} batches)"
        return list(
            await asyncio.gather(
                *(self._with_retry(functools.partial(operation, batch), label) for batch in batches)
            )
        )

    def _timestamp(self) -> str:
        return self._clock.now().isoformat()

    def _today(self) -> str:
        return self._clock.today().isoformat()

    @staticmethod
    def _single(rows: list[Row], entity: str, entity_id: Any) -> Row:
        """Return the only row of a single-row query, the way ``.single()`` does."""
        if len(rows) != 1:
            raise BackendError(
                f"{entity} {entity_id}: expected 1 row, got {len(rows)}", code="PGRST116"
            )
        return rows[0]
