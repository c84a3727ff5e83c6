"""Services – EmployeeService."""

from __future__ import annotations

import asyncio
import itertools
from typing import Sequence

from hrms_core.application.cache import CacheKey
from hrms_core.application.pagination import Filter, Page, PageRequest, Sort
from hrms_core.services.backend import Row
from hrms_core.services.base import BaseService

__all__ = ["EmployeeService"]

TABLE = "profiles"
TAG = "employees"


class EmployeeService(BaseService):
    """Employee profiles, scoped by company.

    List pages are cached under
    ``employees:<company>:<department>:<scope>:<page>:<size>`` with tag
    ``employees``; one profile under ``employee:<id>``. Every write drops
    the ``employees`` tag, and updates and deletes also drop the profile's
    own key. Deletes are soft: ``deleted_at`` is stamped and the row is
    hidden from the default ``active`` scope.
    """

    async def get_employees(
        self,
        company_id: str,
        *,
        department_id: str | None = None,
        include_inactive: bool = False,
        page: int = 1,
        size: int = 50,
    ) -> Page[Row]:
        filters = [Filter.eq("company_id", company_id)]
        if department_id is not None:
            filters.append(Filter.eq("department_id", department_id))
        if not include_inactive:
            # eq None is an IS NULL test
            filters.append(Filter.eq("deleted_at", None))
        request = PageRequest(
            page=page, size=size, sorts=(Sort("first_name"),), filters=tuple(filters)
        )
        key = CacheKey.for_parts(
            "employees",
            company_id,
            department_id or "all",
            "all" if include_inactive else "active",
            page,
            size,
        )
        return await self._cached(key, lambda: self.fetch_paginated(TABLE, request), tags=[TAG])

    async def get_employee_by_id(self, employee_id: str) -> Row:
        async def _fetch() -> Row:
            rows = await self._backend.select(TABLE, filters=(Filter.eq("id", employee_id),))
            return self._single(rows, "employee", employee_id)

        return await self._cached(
            CacheKey.for_resource("employee", employee_id),
            lambda: self._with_retry(_fetch, f"Get employee {employee_id}"),
        )

    async def get_employee_by_email(self, email: str) -> Row | None:
        """Uncached lookup used by sign-up and invitation checks."""

        async def _fetch() -> list[Row]:
            return await self._backend.select(TABLE, filters=(Filter.eq("email", email),), limit=1)

        rows = await self._with_retry(_fetch, f"Get employee by email {email}")
        return rows[0] if rows else None

    async def create_employee(self, profile: Row) -> Row:
        now = self._timestamp()
        record: Row = {**profile, "created_at": now, "updated_at": now}

        async def _insert() -> Row:
            return self._single(await self._backend.insert(TABLE, [record]), "employee", "new")

        row = await self._with_retry(_insert, "Create employee")
        self._cache.invalidate_by_tag(TAG)
        return row

    async def update_employee(self, employee_id: str, changes: Row) -> Row:
        values: Row = {**changes, "updated_at": self._timestamp()}
        return await self._update(employee_id, values, f"Update employee {employee_id}")

    async def delete_employee(self, employee_id: str) -> None:
        now = self._timestamp()
        await self._update(
            employee_id, {"deleted_at": now, "updated_at": now}, f"Delete employee {employee_id}"
        )

    async def bulk_create_employees(self, profiles: Sequence[Row]) -> list[Row]:
        """Insert *profiles* in batches of ``batch_size``, concurrently."""
        now = self._timestamp()
        records = [{**profile, "created_at": now, "updated_at": now} for profile in profiles]

        async def _insert(batch: list[Row]) -> list[Row]:
            return await self._backend.insert(TABLE, batch)

        batches = await self.batch_operation(records, _insert)
        self._cache.invalidate_by_tag(TAG)
        return list(itertools.chain.from_iterable(batches))

    async def bulk_update_employees(self, updates: Sequence[tuple[str, Row]]) -> list[Row]:
        return list(
            await asyncio.gather(
                *(self.update_employee(employee_id, changes) for employee_id, changes in updates)
            )
        )

    async def _update(self, employee_id: str, values: Row, operation: str) -> Row:
        async def _write() -> Row:
            rows = await self._backend.update(TABLE, values, filters=(Filter.eq("id", employee_id),))
            return self._single(rows, "employee", employee_id)

        row = await self._with_retry(_write, operation)
        self._cache.invalidate(CacheKey.for_resource("employee", employee_id))
        self._cache.invalidate_by_tag(TAG)
        return row
