from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..common.datetime_utils import format_hhmm, parse_hhmm, to_local_naive


@dataclass(frozen=True)
class AdmissionWindow:
    """Time-of-day interval in which check-in/out is accepted.

    ``start`` is inclusive, ``end`` exclusive. A window whose end is before its
    start wraps past midnight (21:00-06:00). ``start == end`` is always open.
    """

    start: time = time(0, 0)
    end: time = time(0, 0)

    @classmethod
    def from_strings(cls, start: str, end: str) -> "AdmissionWindow":
        return cls(start=parse_hhmm(start), end=parse_hhmm(end))

    @classmethod
    def from_settings(cls, settings) -> "AdmissionWindow":
        return cls.from_strings(
            getattr(settings, "ADMISSION_WINDOW_START", "00:00"),
            getattr(settings, "ADMISSION_WINDOW_END", "00:00"),
        )

    @property
    def always_open(self) -> bool:
        return self.start == self.end

    def contains(self, moment: datetime) -> bool:
        if self.always_open:
            return True
        t = to_local_naive(moment).time()
        if self.start < self.end:
            return self.start <= t < self.end
        return t >= self.start or t < self.end

    def describe(self) -> str:
        if self.always_open:
            return "any time"
        return f"between {format_hhmm(self.start)} and {format_hhmm(self.end)}"
