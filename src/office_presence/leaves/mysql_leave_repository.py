from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..users.model import Employee
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT l.leave_id, l.user_id, l.leave_type, l.start_date, l.end_date, l.total_days, l.reason,
           l.status, l.admin_notes, l.reviewed_by, l.reviewed_at, l.created_at,
           u.user_id AS u_user_id, u.full_name, u.email, u.role, u.is_active
    FROM leave_requests l
    LEFT JOIN users u ON u.user_id = l.user_id
"""


def _row_to_leave(r: dict) -> LeaveRequest:
    employee = None
    if r.get("u_user_id") is not None:
        employee = Employee(
            user_id=int(r["u_user_id"]),
            full_name=r["full_name"],
            email=r["email"],
            role=Role(r["role"]),
            is_active=bool(r["is_active"]),
        )
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_days=int(r["total_days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        admin_notes=r.get("admin_notes"),
        reviewed_by=int(r["reviewed_by"]) if r.get("reviewed_by") is not None else None,
        reviewed_at=r.get("reviewed_at"),
        created_at=r.get("created_at"),
        employee=employee,
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def find_overlapping(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE l.user_id=%s
                  AND l.status IN ('PENDING','APPROVED')
                  AND l.start_date <= %s AND l.end_date >= %s
                ORDER BY l.start_date ASC
                """,
                (int(user_id), end_date, start_date),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def create_if_no_overlap(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        total_days: int,
        reason: str,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, total_days, reason, status)
                SELECT %s,%s,%s,%s,%s,%s,'PENDING'
                FROM DUAL
                WHERE NOT EXISTS (
                    SELECT 1 FROM leave_requests
                    WHERE user_id=%s
                      AND status IN ('PENDING','APPROVED')
                      AND start_date <= %s AND end_date >= %s
                )
                """,
                (
                    int(user_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    int(total_days),
                    reason,
                    int(user_id),
                    end_date,
                    start_date,
                ),
            )
            if cur.rowcount == 0:
                return None
            return int(cur.lastrowid)

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        admin_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s, admin_notes=COALESCE(%s, admin_notes)
                WHERE leave_id=%s AND status='PENDING'
                """,
                (status.value, int(reviewed_by), reviewed_at, admin_notes, int(leave_id)),
            )
            return cur.rowcount > 0

    def delete_pending(self, *, leave_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_requests WHERE leave_id=%s AND user_id=%s AND status='PENDING'",
                (int(leave_id), int(user_id)),
            )
            return cur.rowcount > 0

    def list(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        oldest_first: bool = False,
    ) -> Sequence[LeaveRequest]:
        where = ["1=1"]
        params: list = []
        if user_id is not None:
            where.append("l.user_id=%s")
            params.append(int(user_id))
        if status:
            where.append("l.status=%s")
            params.append(status.value)
        # Range filters keep requests that share a day with the range.
        if start_date:
            where.append("l.end_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("l.start_date <= %s")
            params.append(end_date)

        order = "ASC" if oldest_first else "DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(where)} ORDER BY l.created_at {order}, l.leave_id {order}",
                tuple(params),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]
