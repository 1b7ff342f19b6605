from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, Tuple

from .model import AttendanceHistoryRow, AttendanceRecord, CheckInDefaults, CheckOutUpdate


class AttendanceRepository(Protocol):
    def find_or_create(self, defaults: CheckInDefaults) -> Tuple[AttendanceRecord, bool]:
        """Atomically fetch the (user, day) record, inserting ``defaults`` if absent.

        Returns ``(record, created)``. Two concurrent calls for the same key must never
        both report ``created=True``.
        """

        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, update: CheckOutUpdate) -> AttendanceRecord:
        raise NotImplementedError

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
        """Newest first. Returns the page and the total number of matching rows."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceHistoryRow]:
        raise NotImplementedError
