from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Check-in after the grace period."""

    def decide_checkin(self, *, late_minutes: int, grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
