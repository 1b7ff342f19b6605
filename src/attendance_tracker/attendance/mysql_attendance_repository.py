from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core.enums import AttendanceStatus, AuthMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_all, fetch_one, time_column
from .model import AttendanceHistoryRow, AttendanceRecord, CheckInDefaults, CheckOutUpdate
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    ar.attendance_id, ar.user_id, ar.work_date, ar.time_in, ar.time_out,
    ar.check_in_device_id, ar.check_out_device_id,
    ar.check_in_auth_method, ar.check_out_auth_method,
    ar.expected_shift_id, ar.expected_start_time, ar.expected_end_time,
    ar.status, ar.work_hours, ar.overtime
"""

_HISTORY_FROM = """
    FROM attendance_records ar
    JOIN users u ON u.user_id = ar.user_id
    LEFT JOIN devices din ON din.device_id = ar.check_in_device_id
    LEFT JOIN devices dout ON dout.device_id = ar.check_out_device_id
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    out_method = r.get("check_out_auth_method")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        time_in=time_column(r["time_in"], with_seconds=True),
        time_out=time_column(r.get("time_out"), with_seconds=True),
        check_in_device_id=int(r["check_in_device_id"]),
        check_out_device_id=r.get("check_out_device_id"),
        check_in_auth_method=AuthMethod(r["check_in_auth_method"]),
        check_out_auth_method=AuthMethod(out_method) if out_method else None,
        expected_shift_id=r.get("expected_shift_id"),
        expected_start_time=time_column(r.get("expected_start_time")),
        expected_end_time=time_column(r.get("expected_end_time")),
        status=AttendanceStatus(r["status"]),
        work_hours=float(r.get("work_hours") or 0),
        overtime=float(r.get("overtime") or 0),
    )


def _to_history_row(r: Dict[str, Any]) -> AttendanceHistoryRow:
    return AttendanceHistoryRow(
        record=_to_record(r),
        user_name=r["user_name"],
        employee_code=r["employee_code"],
        check_in_device=r.get("check_in_device"),
        check_out_device=r.get("check_out_device"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_or_create(self, defaults: CheckInDefaults) -> Tuple[AttendanceRecord, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            # The unique (user_id, work_date) key makes the insert the single point of
            # decision: only one concurrent event can get rowcount == 1.
            cur.execute(
                """
                INSERT IGNORE INTO attendance_records(
                    user_id, work_date, time_in, check_in_device_id, check_in_auth_method,
                    expected_shift_id, expected_start_time, expected_end_time,
                    status, work_hours, overtime
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,0,0)
                """,
                (
                    defaults.user_id,
                    defaults.work_date,
                    defaults.time_in,
                    defaults.device_id,
                    defaults.auth_method.value,
                    defaults.expected_shift_id,
                    defaults.expected_start_time,
                    defaults.expected_end_time,
                    defaults.status.value,
                ),
            )
            created = cur.rowcount == 1

            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                FOR UPDATE
                """,
                (defaults.user_id, defaults.work_date),
            )
            return fetch_one(cur, _to_record), created

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                """,
                (int(user_id), work_date),
            )
            return fetch_one(cur, _to_record)

    def update_checkout(self, *, attendance_id: int, update: CheckOutUpdate) -> AttendanceRecord:
        assignments = ["time_out=%s", "check_out_device_id=%s", "check_out_auth_method=%s"]
        params: list[object] = [update.time_out, update.device_id, update.auth_method.value]
        if update.metrics is not None:
            assignments += ["work_hours=%s", "overtime=%s", "status=%s"]
            params += [update.metrics.work_hours, update.metrics.overtime, update.metrics.status.value]
        params.append(int(attendance_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {', '.join(assignments)} WHERE attendance_id=%s",
                tuple(params),
            )
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s",
                (int(attendance_id),),
            )
            return fetch_one(cur, _to_record)

    def _where(
        self,
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        user_id: Optional[int],
        search: Optional[str] = None,
    ) -> Tuple[str, list]:
        clauses: list[str] = []
        params: list[object] = []

        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)
        if user_id is not None:
            clauses.append("ar.user_id=%s")
            params.append(int(user_id))
        if search:
            clauses.append("u.name LIKE %s")
            params.append(f"%{search}%")

        where = ("WHERE " + " AND ".join(clauses)) if clauses else ""
        return where, params

    def list_history(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[Sequence[AttendanceHistoryRow], int]:
        where, params = self._where(start_date=start_date, end_date=end_date, user_id=user_id, search=search)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total {_HISTORY_FROM} {where}", tuple(params))
            total = fetch_one(cur, lambda r: int(r["total"] or 0)) or 0

            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS},
                       u.name AS user_name, u.employee_code,
                       din.description AS check_in_device, dout.description AS check_out_device
                {_HISTORY_FROM}
                {where}
                ORDER BY ar.work_date DESC, ar.time_in DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return fetch_all(cur, _to_history_row), total

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceHistoryRow]:
        where, params = self._where(start_date=start_date, end_date=end_date, user_id=user_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS},
                       u.name AS user_name, u.employee_code,
                       din.description AS check_in_device, dout.description AS check_out_device
                {_HISTORY_FROM}
                {where}
                ORDER BY ar.work_date ASC, ar.user_id ASC
                """,
                tuple(params),
            )
            return fetch_all(cur, _to_history_row)
