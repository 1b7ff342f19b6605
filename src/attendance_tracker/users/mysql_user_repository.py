from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_one
from .model import User
from .repository import UserRepository

_SELECT = """
    SELECT u.user_id, u.employee_code, u.name, u.email, u.avatar, u.card_number, u.work_schedule_id
    FROM users u
"""


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        employee_code=row["employee_code"],
        name=row["name"],
        email=row["email"],
        avatar=row.get("avatar"),
        card_number=row.get("card_number"),
        work_schedule_id=row.get("work_schedule_id"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.user_id=%s", (int(user_id),))
            return fetch_one(cur, _to_user)

    def get_by_card_number(self, card_number: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE u.card_number=%s", (card_number,))
            return fetch_one(cur, _to_user)

    def get_by_fingerprint(self, *, device_id: int, finger_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                JOIN user_fingerprints f ON f.user_id = u.user_id
                WHERE f.device_id=%s AND f.finger_id=%s
                """,
                (int(device_id), int(finger_id)),
            )
            return fetch_one(cur, _to_user)

    def set_work_schedule(self, user_id: int, schedule_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET work_schedule_id=%s WHERE user_id=%s",
                (schedule_id, int(user_id)),
            )
            return cur.rowcount > 0
