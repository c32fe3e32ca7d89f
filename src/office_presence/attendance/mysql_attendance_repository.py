from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..users.model import Employee
from .model import AttendanceRecord, AttendanceWithEmployee
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    a.attendance_id, a.user_id, a.work_date, a.check_in_time, a.check_in_ip,
    a.check_out_time, a.check_out_ip, a.status, a.working_minutes, a.notes
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_in_ip=r.get("check_in_ip"),
        check_out_time=r.get("check_out_time"),
        check_out_ip=r.get("check_out_ip"),
        working_minutes=int(r.get("working_minutes") or 0),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.user_id=%s AND a.work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        check_in_ip: str,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in_time, check_in_ip, status, notes)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, check_in_time, check_in_ip, status.value, notes),
                )
                return int(cur.lastrowid)
            except mysql.connector.IntegrityError as e:
                if not is_duplicate_key(e):
                    raise

            # Unique (user_id, work_date) hit: only a row without check-in may be filled.
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_in_ip=%s, status=%s, notes=COALESCE(%s, notes)
                WHERE user_id=%s AND work_date=%s AND check_in_time IS NULL
                """,
                (check_in_time, check_in_ip, status.value, notes, int(user_id), work_date),
            )
            if cur.rowcount == 0:
                return None

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else None

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        check_out_ip: str,
        working_minutes: int,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, check_out_ip=%s, working_minutes=%s, status=%s, notes=COALESCE(%s, notes)
                WHERE attendance_id=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                """,
                (check_out_time, check_out_ip, int(working_minutes), status.value, notes, int(attendance_id)),
            )
            return cur.rowcount > 0

    def mark_absent(self, *, user_id: int, work_date: date, notes: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, status, notes)
                VALUES(%s,%s,'ABSENT',%s)
                ON DUPLICATE KEY UPDATE status='ABSENT', notes=COALESCE(VALUES(notes), notes)
                """,
                (int(user_id), work_date, notes),
            )
            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0

    def update_status(self, *, attendance_id: int, status: AttendanceStatus, notes: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s, notes=COALESCE(%s, notes) WHERE attendance_id=%s",
                (status.value, notes, int(attendance_id)),
            )

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["a.user_id=%s"]
        params: list = [int(user_id)]
        if start_date:
            where.append("a.work_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("a.work_date <= %s")
            params.append(end_date)

        sql = f"SELECT {_COLUMNS} FROM attendance_records a WHERE {' AND '.join(where)} ORDER BY a.work_date DESC"
        if limit:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_with_employees(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceWithEmployee]:
        where = ["1=1"]
        params: list = []
        if start_date:
            where.append("a.work_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("a.work_date <= %s")
            params.append(end_date)
        if user_id is not None:
            where.append("a.user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                       u.user_id AS u_user_id, u.full_name, u.email, u.role, u.is_active
                FROM attendance_records a
                LEFT JOIN users u ON u.user_id = a.user_id
                WHERE {' AND '.join(where)}
                ORDER BY a.work_date DESC, a.check_in_time ASC
                """,
                tuple(params),
            )
            out: list[AttendanceWithEmployee] = []
            for r in fetchall(cur):
                employee = None
                if r.get("u_user_id") is not None:
                    employee = Employee(
                        user_id=int(r["u_user_id"]),
                        full_name=r["full_name"],
                        email=r["email"],
                        role=Role(r["role"]),
                        is_active=bool(r["is_active"]),
                    )
                out.append(AttendanceWithEmployee(record=_row_to_record(r), employee=employee))
            return out
