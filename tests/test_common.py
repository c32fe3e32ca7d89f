from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from office_presence.common.datetime_utils import (
    parse_hhmm,
    parse_iso_date,
    parse_optional_datetime,
    rounded_minutes,
    whole_minutes,
)
from office_presence.common.validators import require_enum
from office_presence.core.enums import ErrorCode, LeaveType
from office_presence.core.exceptions import BusinessRuleViolation, NotFoundError, ValidationError
from office_presence.database.mysql_base import normalize_mysql_time
from office_presence.settings import get_settings_module


def test_minutes_helpers():
    assert whole_minutes(timedelta(minutes=31, seconds=59)) == 31
    assert whole_minutes(timedelta(seconds=-30)) == -1
    assert rounded_minutes(timedelta(minutes=10, seconds=30)) == 11
    assert rounded_minutes(timedelta(minutes=10, seconds=29)) == 10


def test_parsers():
    assert parse_iso_date("2024-06-10") == date(2024, 6, 10)
    assert parse_hhmm("23:59") == time(23, 59)
    assert parse_optional_datetime("2026-03-02T09:00:00") == datetime(2026, 3, 2, 9, 0)
    assert parse_optional_datetime(None) is None
    with pytest.raises(ValidationError):
        parse_iso_date("2024-13-01")


def test_client_timestamps_with_offset_become_server_local(server_tz_utc_plus_5):
    assert parse_optional_datetime("2024-06-10T03:00:00Z") == datetime(2024, 6, 10, 8, 0)
    assert parse_optional_datetime("2024-06-10T10:00:00+07:00") == datetime(2024, 6, 10, 8, 0)


def test_require_enum_is_case_insensitive():
    assert require_enum(LeaveType, " sick ", "leave type") == LeaveType.SICK
    with pytest.raises(ValidationError) as exc:
        require_enum(LeaveType, "HOLIDAY", "leave type")
    assert "SICK, VACATION, PERSONAL, EMERGENCY, OTHER" in exc.value.message


def test_errors_carry_code_and_status():
    err = BusinessRuleViolation("Already checked in today", ErrorCode.ALREADY_CHECKED_IN)

    assert err.http_status == 409
    assert err.to_dict() == {"error": "Already checked in today", "code": "ALREADY_CHECKED_IN"}
    assert NotFoundError("x").code == ErrorCode.NOT_FOUND


def test_normalize_mysql_time():
    assert normalize_mysql_time(timedelta(hours=9, minutes=30)) == time(9, 30)
    assert normalize_mysql_time("18:00:00") == time(18, 0)
    assert normalize_mysql_time(None) is None


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "office_presence.settings.production"),
        ("test", "office_presence.settings.testing"),
        ("anything", "office_presence.settings.development"),
    ],
)
def test_settings_module_selection(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module
