from __future__ import annotations

from datetime import date, datetime, time

import pytest

from office_presence.attendance.model import AttendanceRecord
from office_presence.core.enums import AttendanceStatus, Role
from office_presence.core.exceptions import AuthorizationError
from office_presence.dashboard.service import DashboardAggregator
from office_presence.users.model import Employee

TODAY = date(2026, 3, 2)


@pytest.fixture
def dashboard(container) -> DashboardAggregator:
    return container.dashboard


def seed(attendance_repo, user_id, status, *, work_date=TODAY, check_in=None, check_out=None, minutes=0):
    return attendance_repo.add(
        AttendanceRecord(
            attendance_id=0,
            user_id=user_id,
            work_date=work_date,
            status=status,
            check_in_time=datetime.combine(work_date, check_in) if check_in else None,
            check_in_ip="192.168.1.10" if check_in else None,
            check_out_time=datetime.combine(work_date, check_out) if check_out else None,
            working_minutes=minutes,
        )
    )


@pytest.fixture
def ten_employees(users_repo):
    # Alice (2) and Bob (3) exist already; ids 4..11 bring the EMPLOYEE count to 10.
    for user_id in range(4, 12):
        users_repo.add(Employee(user_id=user_id, full_name=f"Employee {user_id}", email=f"e{user_id}@example.com", role=Role.EMPLOYEE))
    return users_repo


def test_today_summary_counts_unrecorded_employees_as_absent(dashboard, attendance_repo, ten_employees):
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, check_in=time(8, 55))
    seed(attendance_repo, 3, AttendanceStatus.LATE, check_in=time(9, 45))
    seed(attendance_repo, 4, AttendanceStatus.PRESENT, check_in=time(9, 0), check_out=time(18, 0), minutes=540)
    seed(attendance_repo, 5, AttendanceStatus.HALF_DAY, check_in=time(9, 0), check_out=time(12, 0), minutes=180)
    seed(attendance_repo, 6, AttendanceStatus.PRESENT, check_in=time(9, 10))
    seed(attendance_repo, 7, AttendanceStatus.PRESENT, check_in=time(9, 20))
    seed(attendance_repo, 8, AttendanceStatus.ABSENT)

    result = dashboard.today_summary(current_role=Role.ADMIN, today=TODAY)

    assert result.summary["totalEmployees"] == 10
    assert result.summary["checkedIn"] == 6
    assert result.summary["checkedOut"] == 2
    assert result.summary["inOffice"] == 4
    assert result.summary["present"] == 4
    assert result.summary["late"] == 1
    assert result.summary["halfDay"] == 1
    assert result.summary["absent"] == 4

    absent_ids = sorted(entry["id"] for entry in result.by_status["ABSENT"])
    assert absent_ids == [8, 9, 10, 11]
    assert [entry["id"] for entry in result.by_status["LATE"]] == [3]


def test_records_of_removed_employees_are_skipped(dashboard, attendance_repo, users_repo):
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, check_in=time(9, 5))
    seed(attendance_repo, 3, AttendanceStatus.PRESENT, check_in=time(8, 30))
    users_repo.remove(3)

    in_office = dashboard.who_is_in_office(current_role=Role.ADMIN, today=TODAY)
    summary = dashboard.today_summary(current_role=Role.ADMIN, today=TODAY)

    assert [e["userId"] for e in in_office] == [2]
    assert summary.summary["checkedIn"] == 1


def test_who_is_in_office_ordered_by_check_in(dashboard, attendance_repo, ten_employees):
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, check_in=time(9, 5))
    seed(attendance_repo, 4, AttendanceStatus.PRESENT, check_in=time(8, 30))
    seed(attendance_repo, 5, AttendanceStatus.PRESENT, check_in=time(8, 0), check_out=time(17, 0), minutes=540)
    seed(attendance_repo, 6, AttendanceStatus.PRESENT, check_in=time(8, 0), work_date=date(2026, 3, 1))

    in_office = dashboard.who_is_in_office(current_role=Role.ADMIN, today=TODAY)

    assert [e["userId"] for e in in_office] == [4, 2]
    assert in_office[0]["checkInIP"] == "192.168.1.10"


def test_range_statistics(dashboard, attendance_repo):
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, work_date=date(2026, 3, 1), minutes=480)
    seed(attendance_repo, 3, AttendanceStatus.LATE, work_date=date(2026, 3, 1), minutes=481)
    seed(attendance_repo, 2, AttendanceStatus.HALF_DAY, work_date=date(2026, 3, 2), minutes=200)
    seed(attendance_repo, 3, AttendanceStatus.ABSENT, work_date=date(2026, 3, 2))
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, work_date=date(2026, 2, 1), minutes=100)

    stats = dashboard.range_statistics(current_role=Role.ADMIN, start_date=date(2026, 3, 1), end_date=date(2026, 3, 31))

    assert stats.summary == {
        "totalRecords": 4,
        "present": 1,
        "late": 1,
        "absent": 1,
        "halfDay": 1,
        # (480 + 481 + 200) / 3 = 387
        "averageWorkingMinutes": 387,
    }
    assert [d["date"] for d in stats.by_date] == ["2026-03-02", "2026-03-01"]
    assert stats.by_date[0] == {"date": "2026-03-02", "present": 0, "late": 0, "absent": 1, "halfDay": 1, "total": 2}
    assert stats.to_dict()["dateRange"] == {"startDate": "2026-03-01", "endDate": "2026-03-31"}


def test_range_statistics_all_time(dashboard, attendance_repo):
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, work_date=date(2025, 1, 1), minutes=1)
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, work_date=date(2026, 1, 1), minutes=2)

    stats = dashboard.range_statistics(current_role=Role.ADMIN)

    # 1.5 rounds half-up
    assert stats.summary["averageWorkingMinutes"] == 2
    assert stats.to_dict()["dateRange"] == {"startDate": "all time", "endDate": "all time"}


def test_employee_stats(dashboard, attendance_repo):
    seed(attendance_repo, 2, AttendanceStatus.PRESENT, work_date=date(2026, 3, 2), minutes=480)
    seed(attendance_repo, 2, AttendanceStatus.LATE, work_date=date(2026, 3, 3), minutes=400)
    seed(attendance_repo, 2, AttendanceStatus.ABSENT, work_date=date(2026, 3, 4))
    seed(attendance_repo, 3, AttendanceStatus.PRESENT, work_date=date(2026, 3, 2), minutes=480)

    stats = dashboard.employee_stats(2)

    assert stats.statistics == {
        "totalDays": 3,
        "present": 1,
        "late": 1,
        "absent": 1,
        "halfDay": 0,
        "totalWorkingMinutes": 880,
        "averageWorkingMinutes": 440,
        "attendancePercentage": 67,
    }
    assert [r.work_date.day for r in stats.recent] == [4, 3, 2]


def test_employee_stats_without_records(dashboard):
    stats = dashboard.employee_stats(2)

    assert stats.statistics["attendancePercentage"] == 0
    assert stats.statistics["averageWorkingMinutes"] == 0
    assert stats.records == []


def test_admin_views_require_admin(dashboard):
    with pytest.raises(AuthorizationError):
        dashboard.today_summary(current_role=Role.EMPLOYEE, today=TODAY)
    with pytest.raises(AuthorizationError):
        dashboard.who_is_in_office(current_role=Role.EMPLOYEE, today=TODAY)
    with pytest.raises(AuthorizationError):
        dashboard.range_statistics(current_role=Role.EMPLOYEE)
