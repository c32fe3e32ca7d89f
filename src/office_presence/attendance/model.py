from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..core.enums import AttendanceStatus
from ..users.model import Employee


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class AttendanceState(str, Enum):
    """Per (employee, day) check-in state."""

    NO_RECORD = "NO_RECORD"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per employee per calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_in_ip: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_ip: Optional[str] = None
    working_minutes: int = 0
    notes: Optional[str] = None

    @property
    def state(self) -> AttendanceState:
        # A row created by mark-absent has no check-in yet.
        if self.check_in_time is None:
            return AttendanceState.NO_RECORD
        if self.check_out_time is None:
            return AttendanceState.CHECKED_IN
        return AttendanceState.CHECKED_OUT

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "checkIn": {"time": _iso(self.check_in_time), "ipAddress": self.check_in_ip} if self.check_in_time else None,
            "checkOut": {"time": _iso(self.check_out_time), "ipAddress": self.check_out_ip} if self.check_out_time else None,
            "status": self.status.value,
            "workingMinutes": self.working_minutes,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceWithEmployee:
    """Read-model for dashboards: a record joined with its employee.

    ``employee`` is None when the employee row no longer exists.
    """

    record: AttendanceRecord
    employee: Optional[Employee]


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    late_minutes: int
    early_minutes: int
    expected_check_in: datetime

    def to_dict(self) -> dict:
        return {
            "attendance": self.record.to_dict(),
            "minutesLate": self.late_minutes,
            "minutesEarly": self.early_minutes,
            "status": self.record.status.value,
            "expectedCheckInTime": self.expected_check_in.isoformat(),
        }
