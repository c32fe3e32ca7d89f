from __future__ import annotations

from datetime import date, datetime

import pytest

from office_presence.core.enums import Role
from office_presence.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from office_presence.schedules.model import ScheduleDefaults
from office_presence.schedules.service import WorkScheduleResolver, clamp_grace

ALICE_ID = 2


@pytest.fixture
def resolver(schedules_repo, users_repo) -> WorkScheduleResolver:
    return WorkScheduleResolver(schedules_repo, users_repo)


def test_resolve_without_schedule_returns_default_without_writing(resolver, schedules_repo):
    resolved = resolver.resolve(ALICE_ID)

    assert resolved.is_default is True
    assert (resolved.check_in_time, resolved.check_out_time, resolved.grace_period_minutes) == ("09:00", "18:00", 30)
    assert schedules_repo.by_user == {}


def test_resolve_persists_default_when_asked(resolver, schedules_repo):
    resolver.resolve(ALICE_ID, persist_default=True)

    stored = schedules_repo.get_active_for_user(ALICE_ID)
    assert stored is not None
    assert stored.check_in_time == "09:00"
    assert resolver.resolve(ALICE_ID).is_default is False


def test_injected_default_is_used(schedules_repo, users_repo):
    resolver = WorkScheduleResolver(
        schedules_repo,
        users_repo,
        defaults=ScheduleDefaults(check_in_time="08:00", check_out_time="17:00", grace_period_minutes=10),
    )

    resolved = resolver.resolve(ALICE_ID)

    assert resolved.check_in_time == "08:00"
    assert resolved.expected_check_in(date(2026, 3, 2)) == datetime(2026, 3, 2, 8, 0)


def test_upsert_validates_and_clamps(resolver):
    saved = resolver.upsert(
        current_role=Role.ADMIN,
        employee_id=ALICE_ID,
        check_in_time="08:30",
        check_out_time="17:30",
        grace_period_minutes=500,
    )

    assert saved.grace_period_minutes == 120
    assert resolver.resolve(ALICE_ID).check_in_time == "08:30"


@pytest.mark.parametrize("bad", ["8:30", "24:00", "12:60", "noon", "", None])
def test_upsert_rejects_malformed_times(resolver, bad):
    with pytest.raises(ValidationError):
        resolver.upsert(current_role=Role.ADMIN, employee_id=ALICE_ID, check_in_time=bad, check_out_time="17:00")


def test_upsert_requires_admin(resolver):
    with pytest.raises(AuthorizationError):
        resolver.upsert(current_role=Role.EMPLOYEE, employee_id=ALICE_ID, check_in_time="08:00", check_out_time="17:00")


def test_upsert_unknown_employee(resolver):
    with pytest.raises(NotFoundError):
        resolver.upsert(current_role=Role.ADMIN, employee_id=999, check_in_time="08:00", check_out_time="17:00")


def test_deactivate_falls_back_to_default(resolver):
    resolver.upsert(current_role=Role.ADMIN, employee_id=ALICE_ID, check_in_time="07:00", check_out_time="16:00")

    resolver.deactivate(current_role=Role.ADMIN, employee_id=ALICE_ID)

    assert resolver.resolve(ALICE_ID).is_default is True
    with pytest.raises(NotFoundError):
        resolver.deactivate(current_role=Role.ADMIN, employee_id=ALICE_ID)


def test_get_for_display_unknown_employee(resolver):
    with pytest.raises(NotFoundError):
        resolver.get_for_display(999)


@pytest.mark.parametrize("value, expected", [(None, 30), ("", 30), (-5, 0), (0, 0), (45, 45), (121, 120)])
def test_clamp_grace(value, expected):
    assert clamp_grace(value) == expected


def test_clamp_grace_rejects_non_numbers():
    with pytest.raises(ValidationError):
        clamp_grace("soon")
