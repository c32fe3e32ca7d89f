from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class HalfDayStrategy(CheckOutStrategy):
    """Short day on checkout (only when the day was PRESENT)."""

    def decide_checkout(self, *, current: AttendanceStatus, working_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY, note=f"Worked {working_minutes} minutes")
