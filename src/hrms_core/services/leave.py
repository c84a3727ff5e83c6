"""Services – LeaveService."""

from __future__ import annotations

from datetime import date

from hrms_core.application.cache import CacheKey
from hrms_core.application.pagination import Filter, Page, PageRequest, Sort, SortDirection
from hrms_core.kernel.errors import ValidationError
from hrms_core.services.backend import Row
from hrms_core.services.base import BaseService
from hrms_core.services.models import BALANCE_COLUMNS, LeaveStatus, LeaveType

__all__ = ["LeaveService"]

REQUESTS_TABLE = "leave_requests"
BALANCES_TABLE = "leave_balances"
TAG = "leave_requests"


class LeaveService(BaseService):
    """Leave requests and per-user leave balances.

    Request lists (``user_leave_requests:<user>``, ``pending_leave_requests``)
    carry tag ``leave_requests``; every request mutation drops that tag and
    the single-request key ``leave_request:<id>``.
    """

    async def get_leave_requests(self, request: PageRequest | None = None) -> Page[Row]:
        return await self.fetch_paginated(REQUESTS_TABLE, request)

    async def get_leave_request_by_id(self, request_id: str) -> Row:
        async def _fetch() -> Row:
            rows = await self._backend.select(
                REQUESTS_TABLE, filters=(Filter.eq("id", request_id),)
            )
            return self._single(rows, "leave_request", request_id)

        return await self._cached(
            CacheKey.for_resource("leave_request", request_id),
            lambda: self._with_retry(_fetch, f"Get leave request {request_id}"),
            tags=[TAG],
        )

    async def get_leave_balance(self, user_id: str) -> Row:
        async def _fetch() -> Row:
            rows = await self._backend.select(
                BALANCES_TABLE, filters=(Filter.eq("user_id", user_id),)
            )
            return self._single(rows, "leave_balance", user_id)

        return await self._cached(
            CacheKey.for_resource("leave_balance", user_id),
            lambda: self._with_retry(_fetch, f"Get leave balance {user_id}"),
        )

    async def create_leave_request(
        self,
        user_id: str,
        leave_type: LeaveType | str,
        start_date: str,
        end_date: str,
        reason: str | None = None,
    ) -> Row:
        """File a pending request. Raises :class:`ValidationError` on a reversed range."""
        if date.fromisoformat(end_date) < date.fromisoformat(start_date):
            raise ValidationError("end_date is before start_date", field="end_date")
        now = self._timestamp()
        record: Row = {
            "user_id": user_id,
            "leave_type": LeaveType(leave_type).value,
            "start_date": start_date,
            "end_date": end_date,
            "reason": reason,
            "status": LeaveStatus.PENDING.value,
            "created_at": now,
            "updated_at": now,
        }

        async def _insert() -> Row:
            rows = await self._backend.insert(REQUESTS_TABLE, [record])
            return self._single(rows, "leave_request", user_id)

        row = await self._with_retry(_insert, "Create leave request")
        self._invalidate_request(row["id"])
        return row

    async def approve_leave_request(self, request_id: str, approved_by: str) -> Row:
        now = self._timestamp()
        values: Row = {
            "status": LeaveStatus.APPROVED.value,
            "approved_by": approved_by,
            "approved_at": now,
            "updated_at": now,
        }
        return await self._update_request(request_id, values, f"Approve leave request {request_id}")

    async def reject_leave_request(self, request_id: str, rejection_reason: str) -> Row:
        values: Row = {
            "status": LeaveStatus.REJECTED.value,
            "rejection_reason": rejection_reason,
            "updated_at": self._timestamp(),
        }
        return await self._update_request(request_id, values, f"Reject leave request {request_id}")

    async def get_user_leave_requests(self, user_id: str) -> list[Row]:
        async def _fetch() -> list[Row]:
            return await self._backend.select(
                REQUESTS_TABLE,
                filters=(Filter.eq("user_id", user_id),),
                sorts=(Sort("created_at", SortDirection.DESC),),
            )

        return await self._cached(
            CacheKey.for_resource("user_leave_requests", user_id),
            lambda: self._with_retry(_fetch, f"Get user leave requests {user_id}"),
            tags=[TAG],
        )

    async def get_pending_leave_requests(self) -> list[Row]:
        """Pending requests, oldest first."""

        async def _fetch() -> list[Row]:
            return await self._backend.select(
                REQUESTS_TABLE,
                filters=(Filter.eq("status", LeaveStatus.PENDING.value),),
                sorts=(Sort("created_at", SortDirection.ASC),),
            )

        return await self._cached(
            "pending_leave_requests",
            lambda: self._with_retry(_fetch, "Get pending leave requests"),
            tags=[TAG],
        )

    async def update_leave_balance(
        self, user_id: str, leave_type: LeaveType | str, days: float
    ) -> Row:
        """Debit *days* from the balance column for *leave_type*.

        Unpaid leave has no balance column and leaves the row unchanged.
        """
        if days < 0:
            raise ValidationError("days must not be negative", field="days")
        leave_type = LeaveType(leave_type)
        balance = await self.get_leave_balance(user_id)
        values: Row = {"updated_at": self._timestamp()}
        column = BALANCE_COLUMNS.get(leave_type)
        if column is not None:
            values[column] = balance[column] - days

        async def _update() -> Row:
            rows = await self._backend.update(
                BALANCES_TABLE, values, filters=(Filter.eq("user_id", user_id),)
            )
            return self._single(rows, "leave_balance", user_id)

        row = await self._with_retry(_update, f"Update leave balance {user_id}")
        self._cache.invalidate(CacheKey.for_resource("leave_balance", user_id))
        return row

    async def _update_request(self, request_id: str, values: Row, operation: str) -> Row:
        async def _update() -> Row:
            rows = await self._backend.update(
                REQUESTS_TABLE, values, filters=(Filter.eq("id", request_id),)
            )
            return self._single(rows, "leave_request", request_id)

        row = await self._with_retry(_update, operation)
        self._invalidate_request(request_id)
        return row

    def _invalidate_request(self, request_id: str) -> None:
        self._cache.invalidate(CacheKey.for_resource("leave_request", request_id))
        self._cache.invalidate_by_tag(TAG)
