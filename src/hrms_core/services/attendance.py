"""Services – AttendanceService."""

from __future__ import annotations

from typing import Sequence

from hrms_core.application.cache import CacheKey
from hrms_core.application.pagination import Filter, Page, PageRequest, Sort, SortDirection
from hrms_core.kernel.errors import ConflictError
from hrms_core.services.backend import Row
from hrms_core.services.base import BaseService
from hrms_core.services.models import AttendanceMark, AttendanceStatus

__all__ = ["AttendanceService"]

TABLE = "attendance_sessions"
TAG = "attendance"
REPORTS_TAG = "attendance_reports"


class AttendanceService(BaseService):
    """Daily sign-in/sign-out sessions.

    Cached reads: ``attendance:<id>``, ``user_attendance:<user>``,
    ``attendance_today:<date>`` and ``attendance_report:<start>:<end>``,
    all tagged ``attendance``. Every write drops the keys it touches and the
    whole ``attendance_reports`` group.
    """

    async def get_attendance(self, request: PageRequest | None = None) -> Page[Row]:
        return await self.fetch_paginated(TABLE, request)

    async def get_attendance_by_id(self, attendance_id: str) -> Row:
        async def _fetch() -> Row:
            rows = await self._backend.select(TABLE, filters=(Filter.eq("id", attendance_id),))
            return self._single(rows, "attendance", attendance_id)

        return await self._cached(
            CacheKey.for_resource("attendance", attendance_id),
            lambda: self._with_retry(_fetch, f"Get attendance {attendance_id}"),
            tags=[TAG],
        )

    async def sign_in(
        self, user_id: str, lat: float | None = None, lng: float | None = None
    ) -> Row:
        """Open today's session for *user_id*.

        Raises :class:`ConflictError` when the user already has a session
        for today.
        """
        today = self._today()

        async def _insert() -> Row:
            existing = await self._backend.select(
                TABLE, filters=(Filter.eq("user_id", user_id), Filter.eq("date", today)), limit=1
            )
            if existing:
                raise ConflictError("Already signed in today", detail={"user_id": user_id})
            now = self._timestamp()
            record: Row = {
                "user_id": user_id,
                "date": today,
                "sign_in_time": now,
                "status": AttendanceStatus.PRESENT.value,
                "created_at": now,
                "updated_at": now,
            }
            if lat is not None:
                record["sign_in_lat"] = lat
            if lng is not None:
                record["sign_in_lng"] = lng
            return self._single(await self._backend.insert(TABLE, [record]), "attendance", user_id)

        row = await self._with_retry(_insert, f"Sign in {user_id}")
        self._invalidate_row(row)
        return row

    async def sign_out(
        self, attendance_id: str, lat: float | None = None, lng: float | None = None
    ) -> Row:
        now = self._timestamp()
        values: Row = {"sign_out_time": now, "updated_at": now}
        if lat is not None:
            values["sign_out_lat"] = lat
        if lng is not None:
            values["sign_out_lng"] = lng
        return await self._update_one(attendance_id, values, f"Sign out {attendance_id}")

    async def get_user_attendance(self, user_id: str, limit: int = 30) -> list[Row]:
        """Most recent sessions for *user_id*, newest date first."""

        async def _fetch() -> list[Row]:
            return await self._backend.select(
                TABLE,
                filters=(Filter.eq("user_id", user_id),),
                sorts=(Sort("date", SortDirection.DESC),),
                limit=limit,
            )

        return await self._cached(
            CacheKey.for_resource("user_attendance", user_id),
            lambda: self._with_retry(_fetch, f"Get user attendance {user_id}"),
            tags=[TAG],
        )

    async def get_today_attendance(self) -> list[Row]:
        today = self._today()

        async def _fetch() -> list[Row]:
            return await self._backend.select(
                TABLE,
                filters=(Filter.eq("date", today),),
                sorts=(Sort("sign_in_time", SortDirection.DESC),),
            )

        return await self._cached(
            CacheKey.for_resource("attendance_today", today),
            lambda: self._with_retry(_fetch, "Get today attendance"),
            tags=[TAG],
        )

    async def mark_absent(self, user_id: str, date: str | None = None) -> Row:
        now = self._timestamp()
        record: Row = {
            "user_id": user_id,
            "date": date or self._today(),
            "status": AttendanceStatus.ABSENT.value,
            "created_at": now,
            "updated_at": now,
        }

        async def _insert() -> Row:
            return self._single(await self._backend.insert(TABLE, [record]), "attendance", user_id)

        row = await self._with_retry(_insert, f"Mark absent {user_id}")
        self._invalidate_row(row)
        return row

    async def get_attendance_report(self, start_date: str, end_date: str) -> list[Row]:
        """Sessions dated within ``[start_date, end_date]``, newest first."""

        async def _fetch() -> list[Row]:
            return await self._backend.select(
                TABLE,
                filters=(Filter("date", "gte", start_date), Filter("date", "lte", end_date)),
                sorts=(Sort("date", SortDirection.DESC),),
            )

        return await self._cached(
            CacheKey.for_report("attendance", start_date, end_date),
            lambda: self._with_retry(_fetch, f"Get attendance report {start_date} to {end_date}"),
            tags=[TAG, REPORTS_TAG],
        )

    async def update_attendance_status(
        self, attendance_id: str, status: AttendanceStatus | str
    ) -> Row:
        values: Row = {"status": AttendanceStatus(status).value, "updated_at": self._timestamp()}
        return await self._update_one(
            attendance_id, values, f"Update attendance status {attendance_id}"
        )

    async def bulk_mark_attendance(self, marks: Sequence[AttendanceMark]) -> list[Row]:
        today = self._today()
        now = self._timestamp()
        records: list[Row] = [
            {
                "user_id": mark.user_id,
                "date": mark.date or today,
                "status": AttendanceStatus(mark.status).value,
                "created_at": now,
                "updated_at": now,
            }
            for mark in marks
        ]

        async def _insert() -> list[Row]:
            return await self._backend.insert(TABLE, records)

        rows = await self._with_retry(_insert, "Bulk mark attendance")
        for row in rows:
            self._invalidate_row(row)
        return rows

    async def _update_one(self, attendance_id: str, values: Row, operation: str) -> Row:
        async def _update() -> Row:
            rows = await self._backend.update(
                TABLE, values, filters=(Filter.eq("id", attendance_id),)
            )
            return self._single(rows, "attendance", attendance_id)

        row = await self._with_retry(_update, operation)
        self._invalidate_row(row)
        return row

    def _invalidate_row(self, row: Row) -> None:
        if "id" in row:
            self._cache.invalidate(CacheKey.for_resource("attendance", row["id"]))
        if "user_id" in row:
            self._cache.invalidate(CacheKey.for_resource("user_attendance", row["user_id"]))
        if "date" in row:
            self._cache.invalidate(CacheKey.for_resource("attendance_today", row["date"]))
        self._cache.invalidate_by_tag(REPORTS_TAG)
