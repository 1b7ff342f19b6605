from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all, fetch_one
from .model import Device
from .repository import DeviceRepository

_SELECT = "SELECT device_id, device_mac, description FROM devices"


class MySQLDeviceRepository(DeviceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _with_members(self, cur, row: Optional[Dict[str, Any]]) -> Optional[Device]:
        if not row:
            return None
        cur.execute("SELECT user_id FROM device_users WHERE device_id=%s", (int(row["device_id"]),))
        return Device(
            device_id=int(row["device_id"]),
            device_mac=row["device_mac"],
            description=row["description"],
            user_ids=frozenset(fetch_all(cur, lambda r: int(r["user_id"]))),
        )

    def get_by_id(self, device_id: int) -> Optional[Device]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE device_id=%s", (int(device_id),))
            return self._with_members(cur, fetch_one(cur, dict))

    def get_by_mac(self, device_mac: str) -> Optional[Device]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE device_mac=%s", (device_mac,))
            return self._with_members(cur, fetch_one(cur, dict))

    def create(self, *, device_mac: str, description: str) -> Device:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO devices(device_mac, description) VALUES(%s,%s)",
                (device_mac, description),
            )
            return Device(device_id=int(cur.lastrowid), device_mac=device_mac, description=description)
