from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """PENDING/APPROVED requests of the employee sharing a day with the range."""

        raise NotImplementedError

    def create_if_no_overlap(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        total_days: int,
        reason: str,
    ) -> Optional[int]:
        """Insert as PENDING unless an overlapping request exists; None when rejected."""

        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        admin_notes: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status``; False when it was not pending."""

        raise NotImplementedError

    def delete_pending(self, *, leave_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def list(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        oldest_first: bool = False,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError
