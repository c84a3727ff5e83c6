"""Services – status and type vocabularies stored in backend rows."""

from __future__ import annotations

import dataclasses
from enum import Enum


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    ON_LEAVE = "on_leave"
    LATE = "late"


class LeaveType(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    PAID = "paid"
    UNPAID = "unpaid"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"


@dataclasses.dataclass(frozen=True)
class AttendanceMark:
    """One row of a bulk attendance write; *date* defaults to today."""

    user_id: str
    status: AttendanceStatus
    date: str | None = None


# Balance column debited for each leave type; unpaid leave has none.
BALANCE_COLUMNS: dict[LeaveType, str] = {
    LeaveType.CASUAL: "casual_leave",
    LeaveType.SICK: "sick_leave",
    LeaveType.PAID: "paid_leave",
}


__all__ = [
    "AttendanceMark",
    "AttendanceStatus",
    "BALANCE_COLUMNS",
    "LeaveStatus",
    "LeaveType",
    "PayrollStatus",
]
