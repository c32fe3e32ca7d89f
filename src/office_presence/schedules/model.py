from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..core import constants


@dataclass(frozen=True)
class WorkSchedule:
    """Domain entity: expected working hours of one employee ("HH:MM" strings)."""

    schedule_id: int
    user_id: int
    check_in_time: str
    check_out_time: str
    grace_period_minutes: int
    is_active: bool = True


@dataclass(frozen=True)
class ScheduleDefaults:
    """Fallback used when an employee has no active schedule."""

    check_in_time: str = constants.DEFAULT_CHECK_IN_TIME
    check_out_time: str = constants.DEFAULT_CHECK_OUT_TIME
    grace_period_minutes: int = constants.DEFAULT_GRACE_MINUTES

    @classmethod
    def from_settings(cls, settings) -> "ScheduleDefaults":
        return cls(
            check_in_time=getattr(settings, "DEFAULT_CHECK_IN", constants.DEFAULT_CHECK_IN_TIME),
            check_out_time=getattr(settings, "DEFAULT_CHECK_OUT", constants.DEFAULT_CHECK_OUT_TIME),
            grace_period_minutes=int(getattr(settings, "DEFAULT_GRACE_MINUTES", constants.DEFAULT_GRACE_MINUTES)),
        )


@dataclass(frozen=True)
class ResolvedSchedule:
    check_in_time: str
    check_out_time: str
    grace_period_minutes: int
    is_default: bool = False
    user_id: Optional[int] = None

    def expected_check_in(self, work_date: date) -> datetime:
        return datetime.combine(work_date, parse_hhmm(self.check_in_time))

    def expected_check_out(self, work_date: date) -> datetime:
        return datetime.combine(work_date, parse_hhmm(self.check_out_time))

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "checkInTime": self.check_in_time,
            "checkOutTime": self.check_out_time,
            "gracePeriod": self.grace_period_minutes,
            "isDefault": self.is_default,
        }
