from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the authenticated principal."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class AttendanceStatus(str, Enum):
    """Day status stored on an attendance record."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"


class LeaveType(str, Enum):
    SICK = "SICK"
    VACATION = "VACATION"
    PERSONAL = "PERSONAL"
    EMERGENCY = "EMERGENCY"
    OTHER = "OTHER"


class LeaveStatus(str, Enum):
    """Approval lifecycle of a leave request. Terminal once reviewed."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_DATES = "INVALID_DATES"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    ALREADY_CHECKED_OUT = "ALREADY_CHECKED_OUT"
    NOT_CHECKED_IN = "NOT_CHECKED_IN"
    OUTSIDE_WINDOW = "OUTSIDE_WINDOW"
    NETWORK_DENIED = "NETWORK_DENIED"
    OVERLAP = "OVERLAP"
    NOT_PENDING = "NOT_PENDING"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE = "PERSISTENCE"
