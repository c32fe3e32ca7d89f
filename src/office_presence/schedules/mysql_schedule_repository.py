from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import format_hhmm
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkSchedule
from .repository import ScheduleRepository


def _hhmm(value) -> str:
    return format_hhmm(normalize_mysql_time(value))


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_user(self, user_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, user_id, check_in_time, check_out_time, grace_period_minutes, is_active
                FROM work_schedules
                WHERE user_id=%s AND is_active=1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return WorkSchedule(
                schedule_id=int(r["schedule_id"]),
                user_id=int(r["user_id"]),
                check_in_time=_hhmm(r["check_in_time"]),
                check_out_time=_hhmm(r["check_out_time"]),
                grace_period_minutes=int(r["grace_period_minutes"]),
                is_active=bool(r["is_active"]),
            )

    def upsert(self, *, user_id: int, check_in_time: str, check_out_time: str, grace_period_minutes: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_schedules(user_id, check_in_time, check_out_time, grace_period_minutes, is_active)
                VALUES(%s,%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    grace_period_minutes=VALUES(grace_period_minutes),
                    is_active=1
                """,
                (int(user_id), check_in_time, check_out_time, int(grace_period_minutes)),
            )

            # If it was an update, lastrowid can be 0; fetch schedule_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT schedule_id FROM work_schedules WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

    def insert_if_absent(self, *, user_id: int, check_in_time: str, check_out_time: str, grace_period_minutes: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO work_schedules(user_id, check_in_time, check_out_time, grace_period_minutes, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (int(user_id), check_in_time, check_out_time, int(grace_period_minutes)),
            )

    def deactivate(self, *, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE work_schedules SET is_active=0 WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_active(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ws.schedule_id, ws.user_id, u.full_name, u.email, u.role,
                       ws.check_in_time, ws.check_out_time, ws.grace_period_minutes
                FROM work_schedules ws
                JOIN users u ON u.user_id = ws.user_id
                WHERE ws.is_active=1
                ORDER BY ws.created_at DESC
                """
            )
            out: list[dict] = []
            for r in fetchall(cur):
                out.append(
                    {
                        "id": int(r["schedule_id"]),
                        "user": {"id": int(r["user_id"]), "name": r["full_name"], "email": r["email"], "role": r["role"]},
                        "checkInTime": _hhmm(r["check_in_time"]),
                        "checkOutTime": _hhmm(r["check_out_time"]),
                        "gracePeriod": int(r["grace_period_minutes"]),
                    }
                )
            return out
