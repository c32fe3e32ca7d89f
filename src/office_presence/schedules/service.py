from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_admin
from ..core import constants
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import ResolvedSchedule, ScheduleDefaults
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def clamp_grace(minutes) -> int:
    """Grace period in [0, MAX_GRACE_MINUTES]; None means the default."""
    if minutes is None or minutes == "":
        return constants.DEFAULT_GRACE_MINUTES
    try:
        value = int(minutes)
    except (TypeError, ValueError):
        raise ValidationError("Grace period must be a whole number of minutes")
    return max(0, min(constants.MAX_GRACE_MINUTES, value))


class WorkScheduleResolver:
    """Resolves expected check-in/out times and grace period per employee."""

    def __init__(
        self,
        schedules: ScheduleRepository,
        users: UserRepository,
        *,
        defaults: Optional[ScheduleDefaults] = None,
    ):
        self._schedules = schedules
        self._users = users
        self._defaults = defaults or ScheduleDefaults()

    @property
    def defaults(self) -> ScheduleDefaults:
        return self._defaults

    def resolve(self, employee_id: int, *, persist_default: bool = False) -> ResolvedSchedule:
        """Active schedule of the employee, else the injected default.

        ``persist_default`` is set by the check-in flow: the default is then
        stored so later reads see the same hours.
        """
        sc = self._schedules.get_active_for_user(int(employee_id))
        if sc:
            return ResolvedSchedule(
                check_in_time=sc.check_in_time,
                check_out_time=sc.check_out_time,
                grace_period_minutes=sc.grace_period_minutes,
                is_default=False,
                user_id=sc.user_id,
            )

        d = self._defaults
        if persist_default:
            self._schedules.insert_if_absent(
                user_id=int(employee_id),
                check_in_time=d.check_in_time,
                check_out_time=d.check_out_time,
                grace_period_minutes=d.grace_period_minutes,
            )
            logger.info("Stored default work schedule for employee %s", employee_id)

        return ResolvedSchedule(
            check_in_time=d.check_in_time,
            check_out_time=d.check_out_time,
            grace_period_minutes=d.grace_period_minutes,
            is_default=True,
            user_id=int(employee_id),
        )

    def get_for_display(self, employee_id: int) -> ResolvedSchedule:
        if not self._users.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")
        return self.resolve(employee_id)

    def upsert(
        self,
        *,
        current_role: Role,
        employee_id: int,
        check_in_time: str,
        check_out_time: str,
        grace_period_minutes=None,
    ) -> ResolvedSchedule:
        require_admin(current_role)

        parse_hhmm(check_in_time)
        parse_hhmm(check_out_time)
        grace = clamp_grace(grace_period_minutes)

        if not self._users.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        self._schedules.upsert(
            user_id=int(employee_id),
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            grace_period_minutes=grace,
        )
        logger.info("Work schedule for employee %s set to %s-%s (grace %s)", employee_id, check_in_time, check_out_time, grace)
        return ResolvedSchedule(
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            grace_period_minutes=grace,
            is_default=False,
            user_id=int(employee_id),
        )

    def deactivate(self, *, current_role: Role, employee_id: int) -> None:
        require_admin(current_role)

        if not self._schedules.deactivate(user_id=int(employee_id)):
            raise NotFoundError("Work schedule not found")

    def list_active(self, *, current_role: Role) -> Sequence[dict]:
        require_admin(current_role)
        return self._schedules.list_active()
