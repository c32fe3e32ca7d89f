from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_admin, require_enum, require_non_empty
from ..core.enums import ErrorCode, LeaveStatus, LeaveType, Role
from ..core.exceptions import BusinessRuleViolation, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import EmployeeLeaveStats, LeaveRequest, LeaveStatistics, inclusive_days
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

REVIEW_STATUSES = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class LeaveLifecycle:
    """Leave requests: PENDING -> APPROVED | REJECTED, no overlaps per employee."""

    def __init__(self, leaves: LeaveRepository, users: UserRepository):
        self._leaves = leaves
        self._users = users

    def create(
        self,
        *,
        employee_id: int,
        leave_type,
        start_date: date,
        end_date: date,
        reason: str,
        today: Optional[date] = None,
    ) -> LeaveRequest:
        today = today or now_local().date()
        kind = require_enum(LeaveType, leave_type, "leave type")
        reason = require_non_empty(reason, "Reason")

        if start_date < today:
            raise ValidationError("Start date cannot be in the past", ErrorCode.INVALID_DATES)
        if end_date < start_date:
            raise ValidationError("End date must be after start date", ErrorCode.INVALID_DATES)

        if not self._users.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        if self._leaves.find_overlapping(user_id=int(employee_id), start_date=start_date, end_date=end_date):
            raise BusinessRuleViolation("You already have a leave request for this period", ErrorCode.OVERLAP)

        leave_id = self._leaves.create_if_no_overlap(
            user_id=int(employee_id),
            leave_type=kind,
            start_date=start_date,
            end_date=end_date,
            total_days=inclusive_days(start_date, end_date),
            reason=reason,
        )
        if leave_id is None:
            raise BusinessRuleViolation("You already have a leave request for this period", ErrorCode.OVERLAP)

        logger.info("Employee %s requested %s leave %s..%s", employee_id, kind.value, start_date, end_date)
        return self._require(leave_id)

    def review(
        self,
        *,
        current_role: Role,
        leave_id: int,
        admin_id: int,
        status,
        admin_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        require_admin(current_role)
        decision = require_enum(LeaveStatus, status, "status")
        if decision not in REVIEW_STATUSES:
            raise ValidationError("Invalid status. Must be one of: APPROVED, REJECTED")

        current = self._require(leave_id)
        if current.status != LeaveStatus.PENDING:
            raise BusinessRuleViolation(
                f"Leave request has already been {current.status.value.lower()}",
                ErrorCode.NOT_PENDING,
            )

        if not self._leaves.decide(
            leave_id=int(leave_id),
            status=decision,
            reviewed_by=int(admin_id),
            reviewed_at=now or now_local(),
            admin_notes=admin_notes or None,
        ):
            # Reviewed concurrently; report what it became.
            current = self._require(leave_id)
            raise BusinessRuleViolation(
                f"Leave request has already been {current.status.value.lower()}",
                ErrorCode.NOT_PENDING,
            )

        logger.info("Leave %s %s by admin %s", leave_id, decision.value, admin_id)
        return self._require(leave_id)

    def delete(self, *, leave_id: int, employee_id: int) -> None:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave or leave.user_id != int(employee_id):
            raise NotFoundError("Leave request not found")
        if leave.status != LeaveStatus.PENDING:
            raise BusinessRuleViolation("Only pending leave requests can be deleted", ErrorCode.NOT_PENDING)

        if not self._leaves.delete_pending(leave_id=int(leave_id), user_id=int(employee_id)):
            raise BusinessRuleViolation("Only pending leave requests can be deleted", ErrorCode.NOT_PENDING)
        logger.info("Employee %s deleted leave %s", employee_id, leave_id)

    def get(self, leave_id: int, employee_id: Optional[int] = None) -> LeaveRequest:
        """``employee_id`` restricts the lookup to the owner's requests."""
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave or (employee_id is not None and leave.user_id != int(employee_id)):
            raise NotFoundError("Leave request not found")
        return leave

    def list_for_employee(
        self,
        employee_id: int,
        *,
        status=None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[LeaveRequest]:
        return self._leaves.list(
            user_id=int(employee_id),
            status=require_enum(LeaveStatus, status, "status") if status else None,
            start_date=start_date,
            end_date=end_date,
        )

    def list_all(
        self,
        *,
        current_role: Role,
        status=None,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[LeaveRequest]:
        require_admin(current_role)
        return self._leaves.list(
            user_id=employee_id,
            status=require_enum(LeaveStatus, status, "status") if status else None,
            start_date=start_date,
            end_date=end_date,
        )

    def list_pending(self, *, current_role: Role) -> Sequence[LeaveRequest]:
        require_admin(current_role)
        return self._leaves.list(status=LeaveStatus.PENDING, oldest_first=True)

    def employee_stats(self, employee_id: int) -> EmployeeLeaveStats:
        leaves = self._leaves.list(user_id=int(employee_id))
        return EmployeeLeaveStats(
            total=len(leaves),
            pending=sum(1 for lv in leaves if lv.status == LeaveStatus.PENDING),
            approved=sum(1 for lv in leaves if lv.status == LeaveStatus.APPROVED),
            rejected=sum(1 for lv in leaves if lv.status == LeaveStatus.REJECTED),
            total_days=sum(lv.total_days for lv in leaves if lv.status == LeaveStatus.APPROVED),
        )

    def global_stats(self, *, current_role: Role) -> LeaveStatistics:
        require_admin(current_role)
        leaves = self._leaves.list()

        by_type = {t: 0 for t in LeaveType}
        for lv in leaves:
            by_type[lv.leave_type] += 1

        return LeaveStatistics(
            total=len(leaves),
            pending=sum(1 for lv in leaves if lv.status == LeaveStatus.PENDING),
            approved=sum(1 for lv in leaves if lv.status == LeaveStatus.APPROVED),
            rejected=sum(1 for lv in leaves if lv.status == LeaveStatus.REJECTED),
            by_type=by_type,
        )

    def _require(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave
