from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceEngine
from .attendance.window import AdmissionWindow
from .dashboard.service import DashboardAggregator
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveLifecycle
from .network.mysql_network_repository import MySQLNetworkConfigRepository
from .network.policy import NetworkAccessPolicy, NetworkGate
from .network.repository import NetworkConfigRepository
from .schedules.model import ScheduleDefaults
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import WorkScheduleResolver
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    network_repo: NetworkConfigRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    network_gate: NetworkGate
    schedule_resolver: WorkScheduleResolver
    attendance_engine: AttendanceEngine
    leave_lifecycle: LeaveLifecycle
    dashboard: DashboardAggregator


def build_services(
    *,
    settings,
    users_repo: UserRepository,
    network_repo: NetworkConfigRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL or in-memory)."""

    network_gate = NetworkGate(network_repo, NetworkAccessPolicy.from_settings(settings))
    schedule_resolver = WorkScheduleResolver(
        schedules_repo,
        users_repo,
        defaults=ScheduleDefaults.from_settings(settings),
    )
    attendance_engine = AttendanceEngine(
        attendance_repo,
        users_repo,
        schedule_resolver,
        network_gate,
        window=AdmissionWindow.from_settings(settings),
        strategy_factory=AttendanceStrategyFactory(),
    )
    leave_lifecycle = LeaveLifecycle(leaves_repo, users_repo)
    dashboard = DashboardAggregator(attendance_repo, users_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        network_repo=network_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        network_gate=network_gate,
        schedule_resolver=schedule_resolver,
        attendance_engine=attendance_engine,
        leave_lifecycle=leave_lifecycle,
        dashboard=dashboard,
    )


def build_container(*, db_config: dict, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        settings=settings,
        users_repo=MySQLUserRepository(conn),
        network_repo=MySQLNetworkConfigRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        conn=conn,
    )
