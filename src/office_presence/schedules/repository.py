from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def get_active_for_user(self, user_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, check_in_time: str, check_out_time: str, grace_period_minutes: int) -> int:
        """Create or update (and reactivate) the schedule of ``user_id``.

        Returns schedule_id.
        """

        raise NotImplementedError

    def insert_if_absent(self, *, user_id: int, check_in_time: str, check_out_time: str, grace_period_minutes: int) -> None:
        """Store a schedule only when the employee has none, active or not."""

        raise NotImplementedError

    def deactivate(self, *, user_id: int) -> bool:
        raise NotImplementedError

    def list_active(self) -> Sequence[dict]:
        """List active schedules for the admin table (joined with user)."""

        raise NotImplementedError
