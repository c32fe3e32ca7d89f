from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from ..attendance.model import AttendanceRecord, AttendanceWithEmployee
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, round_half_up
from ..common.validators import require_admin
from ..core import constants
from ..core.enums import AttendanceStatus, Role
from ..users.model import Employee
from ..users.repository import UserRepository


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def _average(total: int, count: int) -> int:
    return round_half_up(total / count) if count else 0


def _status_entry(row: AttendanceWithEmployee) -> dict:
    r = row.record
    return {
        **row.employee.to_ref(),
        "checkInTime": _iso(r.check_in_time),
        "checkOutTime": _iso(r.check_out_time),
        "workingMinutes": r.working_minutes,
    }


def _absent_entry(employee: Employee, work_date: date) -> dict:
    return {**employee.to_ref(), "date": work_date.isoformat()}


@dataclass(frozen=True)
class TodaySummary:
    work_date: date
    summary: Dict[str, int]
    by_status: Dict[str, List[dict]]

    def to_dict(self) -> dict:
        return {"date": self.work_date.isoformat(), "summary": self.summary, "byStatus": self.by_status}


@dataclass(frozen=True)
class RangeStatistics:
    start_date: Optional[date]
    end_date: Optional[date]
    summary: Dict[str, int]
    by_date: List[dict]

    def to_dict(self) -> dict:
        return {
            "dateRange": {
                "startDate": _iso(self.start_date) or "all time",
                "endDate": _iso(self.end_date) or "all time",
            },
            "summary": self.summary,
            "byDate": self.by_date,
        }


@dataclass(frozen=True)
class EmployeeAttendanceStats:
    statistics: Dict[str, int]
    recent: List[AttendanceRecord]
    records: List[AttendanceRecord]

    def to_dict(self) -> dict:
        return {
            "statistics": self.statistics,
            "recentAttendance": [r.to_dict() for r in self.recent],
            "allAttendance": [r.to_dict() for r in self.records],
        }


class DashboardAggregator:
    """Read-only presence and statistics views over attendance records."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def who_is_in_office(self, *, current_role: Role, today: Optional[date] = None) -> List[dict]:
        require_admin(current_role)
        today = today or now_local().date()

        rows = [
            row
            for row in self._attendance.list_with_employees(start_date=today, end_date=today)
            if row.employee is not None
            and row.record.check_in_time is not None
            and row.record.check_out_time is None
        ]
        rows.sort(key=lambda row: row.record.check_in_time)

        return [
            {
                "id": row.record.attendance_id,
                "userId": row.employee.user_id,
                "name": row.employee.full_name,
                "email": row.employee.email,
                "checkInTime": _iso(row.record.check_in_time),
                "checkInIP": row.record.check_in_ip,
                "status": row.record.status.value,
                "workingMinutes": row.record.working_minutes,
            }
            for row in rows
        ]

    def today_summary(self, *, current_role: Role, today: Optional[date] = None) -> TodaySummary:
        """Counts and per-status listings for one day.

        The ABSENT listing joins explicitly marked records with every employee
        lacking a check-in, one entry per employee; ``absent`` is its size.
        """
        require_admin(current_role)
        today = today or now_local().date()

        rows = [
            row
            for row in self._attendance.list_with_employees(start_date=today, end_date=today)
            if row.employee is not None
        ]
        employees = list(self._users.list_by_role(Role.EMPLOYEE))
        total_employees = self._users.count_by_role(Role.EMPLOYEE)

        def with_status(status: AttendanceStatus) -> List[AttendanceWithEmployee]:
            return [row for row in rows if row.record.status == status]

        checked_in_ids = {row.employee.user_id for row in rows if row.record.check_in_time is not None}

        absent: Dict[int, dict] = {}
        for row in with_status(AttendanceStatus.ABSENT):
            absent.setdefault(row.employee.user_id, _absent_entry(row.employee, today))
        for employee in employees:
            if employee.user_id not in checked_in_ids:
                absent.setdefault(employee.user_id, _absent_entry(employee, today))

        summary = {
            "totalEmployees": total_employees,
            "checkedIn": len(checked_in_ids),
            "checkedOut": sum(1 for row in rows if row.record.check_out_time is not None),
            "inOffice": sum(
                1 for row in rows if row.record.check_in_time is not None and row.record.check_out_time is None
            ),
            "present": len(with_status(AttendanceStatus.PRESENT)),
            "late": len(with_status(AttendanceStatus.LATE)),
            "halfDay": len(with_status(AttendanceStatus.HALF_DAY)),
            "absent": len(absent),
        }
        by_status = {
            AttendanceStatus.PRESENT.value: [_status_entry(r) for r in with_status(AttendanceStatus.PRESENT)],
            AttendanceStatus.LATE.value: [_status_entry(r) for r in with_status(AttendanceStatus.LATE)],
            AttendanceStatus.ABSENT.value: list(absent.values()),
            AttendanceStatus.HALF_DAY.value: [_status_entry(r) for r in with_status(AttendanceStatus.HALF_DAY)],
        }
        return TodaySummary(work_date=today, summary=summary, by_status=by_status)

    def range_statistics(
        self,
        *,
        current_role: Role,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> RangeStatistics:
        require_admin(current_role)
        records = [row.record for row in self._attendance.list_with_employees(start_date=start_date, end_date=end_date)]

        with_minutes = [r.working_minutes for r in records if r.working_minutes > 0]
        summary = {
            "totalRecords": len(records),
            **_status_counts(records),
            "averageWorkingMinutes": _average(sum(with_minutes), len(with_minutes)),
        }

        by_date: Dict[date, dict] = {}
        for r in records:
            day = by_date.setdefault(
                r.work_date,
                {"date": r.work_date.isoformat(), "present": 0, "late": 0, "absent": 0, "halfDay": 0, "total": 0},
            )
            day["total"] += 1
            day[_STATUS_KEYS[r.status]] += 1

        return RangeStatistics(
            start_date=start_date,
            end_date=end_date,
            summary=summary,
            by_date=[by_date[d] for d in sorted(by_date, reverse=True)],
        )

    def employee_stats(
        self,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> EmployeeAttendanceStats:
        records = list(self._attendance.list_for_user(int(employee_id), start_date=start_date, end_date=end_date))

        counts = _status_counts(records)
        total_days = len(records)
        attended = counts["present"] + counts["late"] + counts["halfDay"]
        with_minutes = [r.working_minutes for r in records if r.working_minutes > 0]

        statistics = {
            "totalDays": total_days,
            **counts,
            "totalWorkingMinutes": sum(with_minutes),
            "averageWorkingMinutes": _average(sum(with_minutes), len(with_minutes)),
            "attendancePercentage": round_half_up(attended / total_days * 100) if total_days else 0,
        }
        return EmployeeAttendanceStats(
            statistics=statistics,
            recent=records[: constants.DEFAULT_RECENT_LIMIT],
            records=records,
        )


_STATUS_KEYS = {
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.LATE: "late",
    AttendanceStatus.ABSENT: "absent",
    AttendanceStatus.HALF_DAY: "halfDay",
}


def _status_counts(records: List[AttendanceRecord]) -> Dict[str, int]:
    counts = {key: 0 for key in _STATUS_KEYS.values()}
    for r in records:
        counts[_STATUS_KEYS[r.status]] += 1
    return counts
