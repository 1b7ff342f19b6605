from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_one, time_column
from .model import ShiftPolicy
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, code, name, start_time, end_time, break_start, break_end,
    allow_late, allow_early, overtime_before, overtime_after
"""


def _to_shift(r: Dict[str, Any]) -> ShiftPolicy:
    return ShiftPolicy(
        shift_id=int(r["shift_id"]),
        code=r["code"],
        name=r["name"],
        start_time=time_column(r["start_time"]),
        end_time=time_column(r["end_time"]),
        break_start=time_column(r.get("break_start")),
        break_end=time_column(r.get("break_end")),
        allow_late=int(r.get("allow_late") or 0),
        allow_early=int(r.get("allow_early") or 0),
        overtime_before=int(r.get("overtime_before") or 0),
        overtime_after=int(r.get("overtime_after") or 0),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[ShiftPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_shifts WHERE shift_id=%s", (int(shift_id),))
            return fetch_one(cur, _to_shift)
