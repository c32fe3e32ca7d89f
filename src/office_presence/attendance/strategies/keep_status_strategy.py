from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class KeepStatusStrategy(CheckOutStrategy):
    """Checkout that leaves the check-in status untouched."""

    def decide_checkout(self, *, current: AttendanceStatus, working_minutes: int) -> StatusDecision:
        return StatusDecision(status=current)
