"""Composition root: one shared cache wired into every data-access service."""
from __future__ import annotations

from dataclasses import dataclass

from hrms_core.application.cache import CacheSettings, CacheStore
from hrms_core.application.scheduler import APSchedulerAdapter, Scheduler
from hrms_core.kernel.time import Clock, SystemClock
from hrms_core.observability.metrics import Metrics, NoopMetrics
from hrms_core.resilience.retry import TenacityRetryPolicy
from hrms_core.services import (
    AttendanceService,
    Backend,
    CompanySettingsService,
    EmployeeService,
    LeaveService,
    PayrollService,
    ServiceSettings,
)

__all__ = ["Container", "build_container"]


@dataclass(frozen=True)
class Container:
    backend: Backend
    cache: CacheStore
    scheduler: Scheduler

    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    employee_service: EmployeeService
    company_settings_service: CompanySettingsService

    async def start(self) -> None:
        """Start the scheduler, which begins the cache's expiry sweep."""
        await self.scheduler.start()

    async def shutdown(self) -> None:
        await self.scheduler.stop()
        self.cache.destroy()


def build_container(
    backend: Backend,
    *,
    cache_settings: CacheSettings | None = None,
    service_settings: ServiceSettings | None = None,
    clock: Clock | None = None,
    scheduler: Scheduler | None = None,
    metrics: Metrics | None = None,
    retry: TenacityRetryPolicy | None = None,
) -> Container:
    clock = clock or SystemClock()
    scheduler = scheduler or APSchedulerAdapter()
    cache = CacheStore.from_settings(
        cache_settings or CacheSettings(),
        clock=clock,
        scheduler=scheduler,
        metrics=metrics or NoopMetrics(),
    )
    kwargs = {
        "settings": service_settings or ServiceSettings(),
        "clock": clock,
        "retry": retry,
    }

    return Container(
        backend=backend,
        cache=cache,
        scheduler=scheduler,
        attendance_service=AttendanceService(backend, cache, **kwargs),
        leave_service=LeaveService(backend, cache, **kwargs),
        payroll_service=PayrollService(backend, cache, **kwargs),
        employee_service=EmployeeService(backend, cache, **kwargs),
        company_settings_service=CompanySettingsService(backend, cache, **kwargs),
    )
