"""Data-access services backed by the shared cache."""

from hrms_core.services.attendance import AttendanceService
from hrms_core.services.backend import Backend, BackendError, Row
from hrms_core.services.base import BaseService
from hrms_core.services.company_settings import CompanySettingsService
from hrms_core.services.employee import EmployeeService
from hrms_core.services.errors import is_transient, map_backend_error
from hrms_core.services.leave import LeaveService
from hrms_core.services.models import (
    AttendanceMark,
    AttendanceStatus,
    LeaveStatus,
    LeaveType,
    PayrollStatus,
)
from hrms_core.services.payroll import PayrollService
from hrms_core.services.settings import ServiceSettings

__all__ = [
    "AttendanceMark",
    "AttendanceService",
    "AttendanceStatus",
    "Backend",
    "BackendError",
    "BaseService",
    "CompanySettingsService",
    "EmployeeService",
    "LeaveService",
    "LeaveStatus",
    "LeaveType",
    "PayrollService",
    "PayrollStatus",
    "Row",
    "ServiceSettings",
    "is_transient",
    "map_backend_error",
]
