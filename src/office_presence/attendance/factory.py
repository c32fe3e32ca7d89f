from __future__ import annotations

from dataclasses import dataclass

from ..core import constants
from ..core.enums import AttendanceStatus
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.keep_status_strategy import KeepStatusStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    half_day_threshold_minutes: int = constants.HALF_DAY_THRESHOLD_MINUTES

    def for_checkin(self, *, late_minutes: int, grace_minutes: int) -> CheckInStrategy:
        if late_minutes > grace_minutes:
            return LateStrategy()
        return OnTimeStrategy()

    def for_checkout(self, *, current_status: AttendanceStatus, working_minutes: int) -> CheckOutStrategy:
        # LATE is never downgraded.
        if current_status == AttendanceStatus.PRESENT and working_minutes < self.half_day_threshold_minutes:
            return HalfDayStrategy()
        return KeepStatusStrategy()
