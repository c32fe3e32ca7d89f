from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, rounded_minutes, whole_minutes
from ..common.validators import require_admin, require_enum
from ..core import constants
from ..core.enums import AttendanceStatus, ErrorCode, Role
from ..core.exceptions import AuthorizationError, BusinessRuleViolation, NotFoundError
from ..network.policy import NetworkGate
from ..schedules.service import WorkScheduleResolver
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceState, CheckInResult
from .repository import AttendanceRepository
from .window import AdmissionWindow

logger = logging.getLogger(__name__)


class AttendanceEngine:
    """Check-in/check-out state machine, one record per employee per day.

    Every check happens before the first write; the repository enforces the
    per-day uniqueness and the one-shot checkout.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        schedules: WorkScheduleResolver,
        network: NetworkGate,
        *,
        window: Optional[AdmissionWindow] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._schedules = schedules
        self._network = network
        self._window = window or AdmissionWindow()
        self._strategy_factory = strategy_factory or AttendanceStrategyFactory()

    # --- employee flows -------------------------------------------------

    def check_in(
        self,
        employee_id: int,
        source_ip: str,
        *,
        now: Optional[datetime] = None,
        client_time: Optional[datetime] = None,
    ) -> CheckInResult:
        now = now or now_local()
        self._require_employee(employee_id)

        existing = self._attendance.get_for_user_and_date(int(employee_id), now.date())
        if existing and existing.state != AttendanceState.NO_RECORD:
            raise BusinessRuleViolation("Already checked in today", ErrorCode.ALREADY_CHECKED_IN)

        ip = self._require_network(source_ip)
        self._require_window(client_time or now, "Check-in")

        return self._record_check_in(employee_id, ip, now)

    def check_out(
        self,
        employee_id: int,
        source_ip: str,
        *,
        now: Optional[datetime] = None,
        client_time: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        existing = self._require_checked_in(employee_id, now.date())

        ip = self._require_network(source_ip)
        self._require_window(client_time or now, "Check-out")

        return self._record_check_out(existing, ip, now)

    # --- admin overrides ------------------------------------------------

    def admin_check_in(
        self,
        *,
        current_role: Role,
        admin_id: int,
        employee_id: int,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        require_admin(current_role)
        now = now or now_local()
        self._require_employee(employee_id)

        existing = self._attendance.get_for_user_and_date(int(employee_id), now.date())
        if existing and existing.state != AttendanceState.NO_RECORD:
            raise BusinessRuleViolation("Employee already checked in today", ErrorCode.ALREADY_CHECKED_IN)

        logger.info("Admin %s checks in employee %s", admin_id, employee_id)
        return self._record_check_in(
            employee_id,
            constants.ADMIN_OVERRIDE_IP,
            now,
            notes=f"Checked in by admin {admin_id}",
        )

    def admin_check_out(
        self,
        *,
        current_role: Role,
        admin_id: int,
        employee_id: int,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        require_admin(current_role)
        now = now or now_local()
        existing = self._require_checked_in(employee_id, now.date())

        logger.info("Admin %s checks out employee %s", admin_id, employee_id)
        return self._record_check_out(
            existing,
            constants.ADMIN_OVERRIDE_IP,
            now,
            notes=f"Checked out by admin {admin_id}",
        )

    def mark_absent(
        self,
        *,
        current_role: Role,
        employee_id: int,
        work_date: date,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        require_admin(current_role)
        self._require_employee(employee_id)

        attendance_id = self._attendance.mark_absent(user_id=int(employee_id), work_date=work_date, notes=notes)
        logger.info("Employee %s marked absent on %s", employee_id, work_date)
        return self._get_record(attendance_id)

    def update_status(
        self,
        *,
        current_role: Role,
        record_id: int,
        status,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        require_admin(current_role)
        new_status = require_enum(AttendanceStatus, status, "status")

        self._get_record(record_id)
        self._attendance.update_status(attendance_id=int(record_id), status=new_status, notes=notes)
        logger.info("Attendance %s status set to %s", record_id, new_status.value)
        return self._get_record(record_id)

    # --- reads ----------------------------------------------------------

    def get_today(self, employee_id: int, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        today = today or now_local().date()
        return self._attendance.get_for_user_and_date(int(employee_id), today)

    def history(
        self,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(int(employee_id), start_date=start_date, end_date=end_date)

    # --- internals ------------------------------------------------------

    def _record_check_in(
        self,
        employee_id: int,
        source_ip: str,
        now: datetime,
        *,
        notes: Optional[str] = None,
    ) -> CheckInResult:
        schedule = self._schedules.resolve(employee_id, persist_default=True)
        expected = schedule.expected_check_in(now.date())

        late_minutes = max(0, whole_minutes(now - expected))
        early_minutes = max(0, whole_minutes(expected - now))

        strategy = self._strategy_factory.for_checkin(
            late_minutes=late_minutes,
            grace_minutes=schedule.grace_period_minutes,
        )
        decision = strategy.decide_checkin(late_minutes=late_minutes, grace_minutes=schedule.grace_period_minutes)

        attendance_id = self._attendance.create_checkin(
            user_id=int(employee_id),
            work_date=now.date(),
            check_in_time=now,
            check_in_ip=source_ip,
            status=decision.status,
            notes=notes or decision.note,
        )
        if attendance_id is None:
            raise BusinessRuleViolation("Already checked in today", ErrorCode.ALREADY_CHECKED_IN)

        record = self._get_record(attendance_id)
        logger.info(
            "Employee %s checked in at %s from %s: %s (late %s min)",
            employee_id,
            now.strftime("%H:%M"),
            source_ip,
            record.status.value,
            late_minutes,
        )
        return CheckInResult(
            record=record,
            late_minutes=late_minutes,
            early_minutes=early_minutes,
            expected_check_in=expected,
        )

    def _record_check_out(
        self,
        existing: AttendanceRecord,
        source_ip: str,
        now: datetime,
        *,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        working_minutes = max(0, rounded_minutes(now - existing.check_in_time))

        strategy = self._strategy_factory.for_checkout(
            current_status=existing.status,
            working_minutes=working_minutes,
        )
        decision = strategy.decide_checkout(current=existing.status, working_minutes=working_minutes)

        updated = self._attendance.update_checkout(
            attendance_id=existing.attendance_id,
            check_out_time=now,
            check_out_ip=source_ip,
            working_minutes=working_minutes,
            status=decision.status,
            notes=notes or decision.note,
        )
        if not updated:
            raise BusinessRuleViolation("Already checked out today", ErrorCode.ALREADY_CHECKED_OUT)

        logger.info(
            "Employee %s checked out at %s from %s: %s min, %s",
            existing.user_id,
            now.strftime("%H:%M"),
            source_ip,
            working_minutes,
            decision.status.value,
        )
        return self._get_record(existing.attendance_id)

    def _require_employee(self, employee_id: int) -> None:
        if not self._users.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

    def _require_checked_in(self, employee_id: int, work_date: date) -> AttendanceRecord:
        existing = self._attendance.get_for_user_and_date(int(employee_id), work_date)
        if not existing or existing.state == AttendanceState.NO_RECORD:
            raise BusinessRuleViolation("You have not checked in today", ErrorCode.NOT_CHECKED_IN)
        if existing.state == AttendanceState.CHECKED_OUT:
            raise BusinessRuleViolation("Already checked out today", ErrorCode.ALREADY_CHECKED_OUT)
        return existing

    def _require_network(self, source_ip: str) -> str:
        decision = self._network.check(source_ip)
        if not decision.allowed:
            logger.warning("Network check failed for %s: %s", decision.client_ip, decision.reason)
            raise AuthorizationError(
                "You must be connected to the office network to check in or out",
                ErrorCode.NETWORK_DENIED,
            )
        return decision.client_ip

    def _require_window(self, moment: datetime, action: str) -> None:
        if not self._window.contains(moment):
            raise BusinessRuleViolation(
                f"{action} is only allowed {self._window.describe()}",
                ErrorCode.OUTSIDE_WINDOW,
            )

    def _get_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record
