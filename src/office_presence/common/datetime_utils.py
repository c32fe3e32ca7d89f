from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(value)


def is_hhmm(value: str) -> bool:
    return bool(value) and bool(_HHMM.match(value))


def parse_hhmm(value: str) -> time:
    """Parse a 24h ``HH:MM`` string."""
    if not isinstance(value, str) or not is_hhmm(value):
        raise ValidationError(f"Invalid time {value!r}, use HH:MM (e.g. 09:00, 18:00)")
    hours, minutes = value.split(":")
    return time(hour=int(hours), minute=int(minutes))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def whole_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, truncated."""
    return int(delta.total_seconds() // 60)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rounded_minutes(delta: timedelta) -> int:
    """Minutes in ``delta`` rounded half-up."""
    return round_half_up(delta.total_seconds() / 60)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_local_naive(value: datetime) -> datetime:
    """Server-local wall time of ``value``; naive values are already local."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_optional_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp sent by a client, e.g. ``clientTime``.

    An offset (``Z``, ``+07:00``) is converted to server-local time.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid timestamp {value!r}, expected ISO-8601")
    return to_local_naive(parsed)
