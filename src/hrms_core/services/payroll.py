"""Services – PayrollService."""

from __future__ import annotations

from typing import Sequence

from hrms_core.application.cache import MISSING, CacheKey
from hrms_core.application.pagination import Filter, Page, PageRequest
from hrms_core.kernel.errors import ValidationError
from hrms_core.services.backend import Row
from hrms_core.services.base import BaseService
from hrms_core.services.models import PayrollStatus

__all__ = ["PayrollService"]

TABLE = "payroll"
TAG = "payroll"

# Placeholder attendance figures written on draft rows until the month is reconciled.
DRAFT_DEFAULTS: Row = {
    "working_days": 22,
    "present_days": 20,
    "paid_leave_days": 1,
    "unpaid_leave_days": 0,
}


class PayrollService(BaseService):
    async def get_payroll(self, request: PageRequest | None = None) -> Page[Row]:
        return await self.fetch_paginated(TABLE, request)

    async def get_payroll_by_user_and_month(
        self, user_id: str, month: int, year: int
    ) -> Row | None:
        """Return the payroll row for one user and month, or ``None``.

        Only found rows are cached, so a row created later is seen on the
        next call.
        """
        key = CacheKey.for_parts("payroll", user_id, month, year)
        cached = self._cache.get(key, MISSING)
        if cached is not MISSING:
            return cached

        async def _fetch() -> list[Row]:
            return await self._backend.select(
                TABLE,
                filters=(
                    Filter.eq("user_id", user_id),
                    Filter.eq("month", month),
                    Filter.eq("year", year),
                ),
                limit=1,
            )

        rows = await self._with_retry(_fetch, f"Get payroll {user_id}:{month}:{year}")
        if not rows:
            return None
        self._cache.set(key, rows[0], ttl=self._settings.query_ttl, tags=[TAG])
        return rows[0]

    async def process_payroll(
        self,
        month: int,
        year: int,
        employee_ids: Sequence[str],
        base_salary: float = 0,
        deductions: float = 0,
    ) -> list[Row]:
        """Insert one draft payroll row per employee for *month*/*year*."""
        records = self._draft_rows(employee_ids, month, year, base_salary, deductions)

        async def _insert() -> list[Row]:
            return await self._backend.insert(TABLE, records)

        rows = await self._with_retry(_insert, "Process payroll")
        self._cache.invalidate_by_tag(TAG)
        return rows

    async def update_payroll_status(self, payroll_id: str, status: PayrollStatus | str) -> Row:
        values: Row = {"status": PayrollStatus(status).value, "updated_at": self._timestamp()}

        async def _update() -> Row:
            rows = await self._backend.update(TABLE, values, filters=(Filter.eq("id", payroll_id),))
            return self._single(rows, "payroll", payroll_id)

        row = await self._with_retry(_update, f"Update payroll {payroll_id}")
        self._cache.invalidate_by_tag(TAG)
        return row

    async def bulk_process_payroll(
        self, employee_ids: Sequence[str], month: int, year: int
    ) -> list[Row]:
        """Like :meth:`process_payroll` with zero salaries, inserted in batches."""
        self._check_period(month, year)

        async def _insert(batch: list[str]) -> list[Row]:
            return await self._backend.insert(TABLE, self._draft_rows(batch, month, year, 0, 0))

        batches = await self.batch_operation(employee_ids, _insert)
        self._cache.invalidate_by_tag(TAG)
        return [row for batch in batches for row in batch]

    def _draft_rows(
        self,
        employee_ids: Sequence[str],
        month: int,
        year: int,
        base_salary: float,
        deductions: float,
    ) -> list[Row]:
        self._check_period(month, year)
        now = self._timestamp()
        return [
            {
                "user_id": user_id,
                "month": month,
                "year": year,
                **DRAFT_DEFAULTS,
                "base_salary": base_salary,
                "deductions": deductions,
                "net_salary": base_salary - deductions,
                "status": PayrollStatus.DRAFT.value,
                "created_at": now,
                "updated_at": now,
            }
            for user_id in employee_ids
        ]

    @staticmethod
    def _check_period(month: int, year: int) -> None:
        if not 1 <= month <= 12:
            raise ValidationError(f"month must be 1-12, got {month}", field="month")
        if year < 1:
            raise ValidationError(f"year must be positive, got {year}", field="year")
