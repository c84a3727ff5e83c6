"""Services – CompanySettingsService."""

from __future__ import annotations

from hrms_core.application.cache import CacheKey
from hrms_core.application.pagination import Filter, Sort
from hrms_core.services.backend import Row
from hrms_core.services.base import BaseService

__all__ = ["CompanySettingsService"]

SETTINGS_TABLE = "company_settings"
HOLIDAYS_TABLE = "holidays"
DEPARTMENTS_TABLE = "departments"

# Written the first time a company's settings are read.
DEFAULT_COMPANY_SETTINGS: Row = {
    "timezone": "UTC",
    "currency": "USD",
    "financial_year_start": "01-01",
    "working_days": ("monday", "tuesday", "wednesday", "thursday", "friday"),
    "office_hours_start": "09:00",
    "office_hours_end": "18:00",
    "geofencing_enabled": False,
    "geofence_radius": 500,
    "email_notifications": True,
    "sms_notifications": False,
}


class CompanySettingsService(BaseService):
    """Per-company settings, holidays and departments.

    Each company has three cached reads, ``company_settings:<company>``,
    ``holidays:<company>`` and ``departments:<company>``, and a write only
    drops the one key it affects.
    """

    async def get_company_settings(self, company_id: str) -> Row:
        """Return the company's settings row, creating the defaults if it has none."""

        async def _select() -> list[Row]:
            return await self._backend.select(
                SETTINGS_TABLE, filters=(Filter.eq("company_id", company_id),), limit=1
            )

        async def _load() -> Row:
            rows = await self._with_retry(_select, f"Get company settings {company_id}")
            if rows:
                return rows[0]
            return await self.create_company_settings(company_id)

        return await self._cached(CacheKey.for_resource(SETTINGS_TABLE, company_id), _load)

    async def create_company_settings(self, company_id: str) -> Row:
        now = self._timestamp()
        record: Row = {
            **DEFAULT_COMPANY_SETTINGS,
            "working_days": list(DEFAULT_COMPANY_SETTINGS["working_days"]),
            "company_id": company_id,
            "created_at": now,
            "updated_at": now,
        }

        async def _insert() -> Row:
            rows = await self._backend.insert(SETTINGS_TABLE, [record])
            return self._single(rows, "company_settings", company_id)

        row = await self._with_retry(_insert, f"Create company settings {company_id}")
        self._cache.invalidate(CacheKey.for_resource(SETTINGS_TABLE, company_id))
        return row

    async def update_company_settings(self, company_id: str, changes: Row) -> Row:
        existing = await self.get_company_settings(company_id)
        return await self._change(
            SETTINGS_TABLE,
            existing["id"],
            company_id,
            changes,
            f"Update company settings {company_id}",
        )

    async def get_holidays(self, company_id: str) -> list[Row]:
        """Holidays in date order."""
        return await self._list(HOLIDAYS_TABLE, company_id, "date")

    async def add_holiday(
        self, company_id: str, name: str, date: str, *, is_optional: bool = False
    ) -> Row:
        values: Row = {"name": name, "date": date, "is_optional": is_optional}
        return await self._add(HOLIDAYS_TABLE, company_id, values, f"Add holiday {name}")

    async def update_holiday(self, holiday_id: str, company_id: str, changes: Row) -> Row:
        return await self._change(
            HOLIDAYS_TABLE, holiday_id, company_id, changes, f"Update holiday {holiday_id}"
        )

    async def delete_holiday(self, holiday_id: str, company_id: str) -> None:
        await self._remove(HOLIDAYS_TABLE, holiday_id, company_id, f"Delete holiday {holiday_id}")

    async def get_departments(self, company_id: str) -> list[Row]:
        """Departments in name order."""
        return await self._list(DEPARTMENTS_TABLE, company_id, "name")

    async def add_department(
        self, company_id: str, name: str, description: str | None = None
    ) -> Row:
        values: Row = {"name": name, "description": description}
        return await self._add(DEPARTMENTS_TABLE, company_id, values, f"Add department {name}")

    async def update_department(self, department_id: str, company_id: str, changes: Row) -> Row:
        return await self._change(
            DEPARTMENTS_TABLE,
            department_id,
            company_id,
            changes,
            f"Update department {department_id}",
        )

    async def delete_department(self, department_id: str, company_id: str) -> None:
        """Raises :class:`ConflictError` while employees still reference the department."""
        await self._remove(
            DEPARTMENTS_TABLE, department_id, company_id, f"Delete department {department_id}"
        )

    async def _list(self, table: str, company_id: str, order_by: str) -> list[Row]:
        async def _fetch() -> list[Row]:
            return await self._backend.select(
                table, filters=(Filter.eq("company_id", company_id),), sorts=(Sort(order_by),)
            )

        return await self._cached(
            CacheKey.for_resource(table, company_id),
            lambda: self._with_retry(_fetch, f"Get {table} {company_id}"),
        )

    async def _add(self, table: str, company_id: str, values: Row, operation: str) -> Row:
        now = self._timestamp()
        record: Row = {**values, "company_id": company_id, "created_at": now, "updated_at": now}

        async def _insert() -> Row:
            return self._single(await self._backend.insert(table, [record]), table, company_id)

        row = await self._with_retry(_insert, operation)
        self._cache.invalidate(CacheKey.for_resource(table, company_id))
        return row

    async def _change(
        self, table: str, row_id: str, company_id: str, changes: Row, operation: str
    ) -> Row:
        values: Row = {**changes, "updated_at": self._timestamp()}

        async def _update() -> Row:
            rows = await self._backend.update(table, values, filters=(Filter.eq("id", row_id),))
            return self._single(rows, table, row_id)

        row = await self._with_retry(_update, operation)
        self._cache.invalidate(CacheKey.for_resource(table, company_id))
        return row

    async def _remove(self, table: str, row_id: str, company_id: str, operation: str) -> None:
        async def _delete() -> int:
            return await self._backend.delete(table, filters=(Filter.eq("id", row_id),))

        await self._with_retry(_delete, operation)
        self._cache.invalidate(CacheKey.for_resource(table, company_id))
