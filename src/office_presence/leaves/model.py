from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional

from ..core.enums import LeaveStatus, LeaveType
from ..users.model import Employee


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave request; terminal once reviewed."""

    leave_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    total_days: int
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    admin_notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    employee: Optional[Employee] = None

    def overlaps(self, start_date: date, end_date: date) -> bool:
        return ranges_overlap(self.start_date, self.end_date, start_date, end_date)

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "userId": self.user_id,
            "user": self.employee.to_ref() if self.employee else None,
            "leaveType": self.leave_type.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalDays": self.total_days,
            "reason": self.reason,
            "status": self.status.value,
            "adminNotes": self.admin_notes,
            "reviewedBy": self.reviewed_by,
            "reviewedAt": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive date ranges share at least one day."""
    return a_start <= b_end and a_end >= b_start


def inclusive_days(start_date: date, end_date: date) -> int:
    return (end_date - start_date).days + 1


@dataclass(frozen=True)
class EmployeeLeaveStats:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total_days: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "pending": self.pending,
            "approved": self.approved,
            "rejected": self.rejected,
            "totalDays": self.total_days,
        }


@dataclass(frozen=True)
class LeaveStatistics:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    by_type: Dict[LeaveType, int] = field(default_factory=lambda: {t: 0 for t in LeaveType})

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "pending": self.pending,
            "approved": self.approved,
            "rejected": self.rejected,
            "byType": {t.value: n for t, n in self.by_type.items()},
        }
