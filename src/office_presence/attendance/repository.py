from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceWithEmployee


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        check_in_ip: str,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> Optional[int]:
        """Insert the day's check-in atomically.

        A row without check-in (marked absent) is filled in place. Returns the
        attendance id, or None when the day already has a check-in.
        """

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        check_out_ip: str,
        working_minutes: int,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        """Set checkout only if the record has none yet."""

        raise NotImplementedError

    def mark_absent(self, *, user_id: int, work_date: date, notes: Optional[str] = None) -> int:
        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: AttendanceStatus, notes: Optional[str] = None) -> None:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of one employee, newest first."""

        raise NotImplementedError

    def list_with_employees(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceWithEmployee]:
        raise NotImplementedError
