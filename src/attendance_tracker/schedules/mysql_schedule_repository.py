from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_one
from .model import WorkSchedule, normalize_day_mapping
from .repository import WorkScheduleRepository


def _to_schedule(r: Dict[str, Any]) -> WorkSchedule:
    # The shifts column is JSON; depending on the connector it arrives as str or bytes.
    return WorkSchedule(
        schedule_id=int(r["schedule_id"]),
        schedule_name=r["schedule_name"],
        shifts=normalize_day_mapping(r.get("shifts")),
        note=r.get("note"),
    )


class MySQLWorkScheduleRepository(WorkScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, schedule_name, shifts, note
                FROM work_schedules
                WHERE schedule_id=%s
                """,
                (int(schedule_id),),
            )
            return fetch_one(cur, _to_schedule)
