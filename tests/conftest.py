from __future__ import annotations

import threading
import time as clock
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from office_presence.attendance.model import AttendanceRecord, AttendanceWithEmployee
from office_presence.container import build_services
from office_presence.core.enums import AttendanceStatus, LeaveStatus, Role
from office_presence.leaves.model import LeaveRequest
from office_presence.network.model import NetworkConfig
from office_presence.schedules.model import WorkSchedule
from office_presence.settings import testing as testing_settings
from office_presence.users.model import Employee


class InMemoryUsers:
    def __init__(self, *employees: Employee):
        self.by_id: dict[int, Employee] = {e.user_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self.by_id[employee.user_id] = employee
        return employee

    def remove(self, user_id: int) -> None:
        self.by_id.pop(user_id, None)

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self.by_id.get(int(user_id))

    def list_by_role(self, role: Role):
        return sorted((e for e in self.by_id.values() if e.role == role), key=lambda e: e.full_name)

    def count_by_role(self, role: Role) -> int:
        return len(self.list_by_role(role))


class InMemoryNetworks:
    def __init__(self, *configs: NetworkConfig):
        self.configs = list(configs)

    def list_active(self):
        return [c for c in self.configs if c.is_active]


class InMemorySchedules:
    def __init__(self):
        self.by_user: dict[int, WorkSchedule] = {}
        self._next_id = 1

    def get_active_for_user(self, user_id: int) -> Optional[WorkSchedule]:
        sc = self.by_user.get(int(user_id))
        return sc if sc and sc.is_active else None

    def upsert(self, *, user_id, check_in_time, check_out_time, grace_period_minutes) -> int:
        existing = self.by_user.get(int(user_id))
        schedule_id = existing.schedule_id if existing else self._take_id()
        self.by_user[int(user_id)] = WorkSchedule(
            schedule_id=schedule_id,
            user_id=int(user_id),
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            grace_period_minutes=grace_period_minutes,
            is_active=True,
        )
        return schedule_id

    def insert_if_absent(self, *, user_id, check_in_time, check_out_time, grace_period_minutes) -> None:
        if int(user_id) in self.by_user:
            return
        self.upsert(
            user_id=user_id,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            grace_period_minutes=grace_period_minutes,
        )

    def deactivate(self, *, user_id) -> bool:
        sc = self.by_user.get(int(user_id))
        if not sc or not sc.is_active:
            return False
        self.by_user[int(user_id)] = replace(sc, is_active=False)
        return True

    def list_active(self):
        return [
            {
                "id": sc.schedule_id,
                "user": {"id": sc.user_id},
                "checkInTime": sc.check_in_time,
                "checkOutTime": sc.check_out_time,
                "gracePeriod": sc.grace_period_minutes,
            }
            for sc in self.by_user.values()
            if sc.is_active
        ]

    def _take_id(self) -> int:
        sid = self._next_id
        self._next_id += 1
        return sid


class InMemoryAttendance:
    """Mirrors the unique (user_id, work_date) key and the conditional updates."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._lock = threading.Lock()
        self.by_id: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.by_id.get(int(attendance_id))

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in list(self.by_id.values()):
            if r.user_id == int(user_id) and r.work_date == work_date:
                return r
        return None

    def create_checkin(self, *, user_id, work_date, check_in_time, check_in_ip, status, notes=None):
        with self._lock:
            existing = self.get_for_user_and_date(user_id, work_date)
            if existing and existing.check_in_time is not None:
                return None
            if existing:
                self.by_id[existing.attendance_id] = replace(
                    existing,
                    check_in_time=check_in_time,
                    check_in_ip=check_in_ip,
                    status=status,
                    notes=notes if notes is not None else existing.notes,
                )
                return existing.attendance_id
            return self._insert(
                AttendanceRecord(
                    attendance_id=0,
                    user_id=int(user_id),
                    work_date=work_date,
                    status=status,
                    check_in_time=check_in_time,
                    check_in_ip=check_in_ip,
                    notes=notes,
                )
            )

    def update_checkout(self, *, attendance_id, check_out_time, check_out_ip, working_minutes, status, notes=None):
        with self._lock:
            r = self.by_id.get(int(attendance_id))
            if not r or r.check_in_time is None or r.check_out_time is not None:
                return False
            self.by_id[r.attendance_id] = replace(
                r,
                check_out_time=check_out_time,
                check_out_ip=check_out_ip,
                working_minutes=working_minutes,
                status=status,
                notes=notes if notes is not None else r.notes,
            )
            return True

    def mark_absent(self, *, user_id, work_date, notes=None) -> int:
        with self._lock:
            existing = self.get_for_user_and_date(user_id, work_date)
            if existing:
                self.by_id[existing.attendance_id] = replace(
                    existing,
                    status=AttendanceStatus.ABSENT,
                    notes=notes if notes is not None else existing.notes,
                )
                return existing.attendance_id
            return self._insert(
                AttendanceRecord(
                    attendance_id=0,
                    user_id=int(user_id),
                    work_date=work_date,
                    status=AttendanceStatus.ABSENT,
                    notes=notes,
                )
            )

    def update_status(self, *, attendance_id, status, notes=None) -> None:
        r = self.by_id[int(attendance_id)]
        self.by_id[r.attendance_id] = replace(r, status=status, notes=notes if notes is not None else r.notes)

    def list_for_user(self, user_id, *, start_date=None, end_date=None, limit=None):
        items = [
            r
            for r in self.by_id.values()
            if r.user_id == int(user_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit] if limit else items

    def list_with_employees(self, *, start_date=None, end_date=None, user_id=None):
        return [
            AttendanceWithEmployee(record=r, employee=self._users.get_by_id(r.user_id))
            for r in sorted(self.by_id.values(), key=lambda r: (r.work_date, r.attendance_id), reverse=True)
            if (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (user_id is None or r.user_id == int(user_id))
        ]

    # test helper: seed a record directly
    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._insert(record)
        return self.by_id[self._next_id - 1]

    def _insert(self, record: AttendanceRecord) -> int:
        rid = self._next_id
        self._next_id += 1
        self.by_id[rid] = replace(record, attendance_id=rid)
        return rid


class InMemoryLeaves:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._lock = threading.Lock()
        self.by_id: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        lv = self.by_id.get(int(leave_id))
        return replace(lv, employee=self._users.get_by_id(lv.user_id)) if lv else None

    def find_overlapping(self, *, user_id, start_date, end_date):
        return [
            lv
            for lv in self.by_id.values()
            if lv.user_id == int(user_id)
            and lv.status in (LeaveStatus.PENDING, LeaveStatus.APPROVED)
            and lv.overlaps(start_date, end_date)
        ]

    def create_if_no_overlap(self, *, user_id, leave_type, start_date, end_date, total_days, reason):
        with self._lock:
            if self.find_overlapping(user_id=user_id, start_date=start_date, end_date=end_date):
                return None
            lid = self._next_id
            self._next_id += 1
            self.by_id[lid] = LeaveRequest(
                leave_id=lid,
                user_id=int(user_id),
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                total_days=total_days,
                reason=reason,
                created_at=datetime(2026, 3, 1, 8, 0, 0),
            )
            return lid

    def decide(self, *, leave_id, status, reviewed_by, reviewed_at, admin_notes=None) -> bool:
        with self._lock:
            lv = self.by_id.get(int(leave_id))
            if not lv or lv.status != LeaveStatus.PENDING:
                return False
            self.by_id[lv.leave_id] = replace(
                lv,
                status=status,
                reviewed_by=reviewed_by,
                reviewed_at=reviewed_at,
                admin_notes=admin_notes if admin_notes is not None else lv.admin_notes,
            )
            return True

    def delete_pending(self, *, leave_id, user_id) -> bool:
        lv = self.by_id.get(int(leave_id))
        if not lv or lv.user_id != int(user_id) or lv.status != LeaveStatus.PENDING:
            return False
        del self.by_id[lv.leave_id]
        return True

    def list(self, *, user_id=None, status=None, start_date=None, end_date=None, oldest_first=False):
        items = [
            self.get_by_id(lv.leave_id)
            for lv in self.by_id.values()
            if (user_id is None or lv.user_id == int(user_id))
            and (status is None or lv.status == status)
            and (start_date is None or lv.end_date >= start_date)
            and (end_date is None or lv.start_date <= end_date)
        ]
        items.sort(key=lambda lv: lv.leave_id, reverse=not oldest_first)
        return items


ADMIN = Employee(user_id=1, full_name="Ada Admin", email="admin@example.com", role=Role.ADMIN)
ALICE = Employee(user_id=2, full_name="Alice", email="alice@example.com", role=Role.EMPLOYEE)
BOB = Employee(user_id=3, full_name="Bob", email="bob@example.com", role=Role.EMPLOYEE)

OFFICE_IP = "192.168.1.42"
OFFICE_NETWORK = NetworkConfig(config_id=1, name="Office WiFi", ip_address="192.168.1.0", subnet="/24")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def server_tz_utc_plus_5(monkeypatch):
    """Run the test with the process local time zone at UTC+05:00."""
    if not hasattr(clock, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "PKT-5")
    clock.tzset()
    yield
    monkeypatch.undo()
    clock.tzset()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(ADMIN, ALICE, BOB)


@pytest.fixture
def network_repo() -> InMemoryNetworks:
    return InMemoryNetworks(OFFICE_NETWORK)


@pytest.fixture
def schedules_repo() -> InMemorySchedules:
    return InMemorySchedules()


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def leaves_repo(users_repo) -> InMemoryLeaves:
    return InMemoryLeaves(users_repo)


@pytest.fixture
def container(users_repo, network_repo, schedules_repo, attendance_repo, leaves_repo):
    return build_services(
        settings=testing_settings,
        users_repo=users_repo,
        network_repo=network_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
    )
