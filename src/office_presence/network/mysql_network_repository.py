from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import NetworkConfig
from .repository import NetworkConfigRepository


class MySQLNetworkConfigRepository(NetworkConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[NetworkConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT config_id, name, ip_address, subnet, is_active, description
                FROM network_configs
                WHERE is_active=1
                ORDER BY config_id ASC
                """
            )
            return [
                NetworkConfig(
                    config_id=int(r["config_id"]),
                    name=r["name"],
                    ip_address=r["ip_address"],
                    subnet=r.get("subnet"),
                    is_active=bool(r["is_active"]),
                    description=r.get("description"),
                )
                for r in fetchall(cur)
            ]
