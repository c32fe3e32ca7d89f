from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class CheckInStrategy(ABC):
    """Strategy Pattern: status of a day at check-in time."""

    @abstractmethod
    def decide_checkin(self, *, late_minutes: int, grace_minutes: int) -> StatusDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: final status of a day at check-out time."""

    @abstractmethod
    def decide_checkout(self, *, current: AttendanceStatus, working_minutes: int) -> StatusDecision:
        raise NotImplementedError
