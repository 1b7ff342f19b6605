from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from ..attendance.model import AttendanceHistoryRow
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_HISTORY_PAGE_SIZE
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def _empty_counts() -> Dict[str, int]:
    return {s.value: 0 for s in AttendanceStatus}


@dataclass
class AttendanceTotals:
    records: int = 0
    counts: Dict[str, int] = field(default_factory=_empty_counts)
    work_hours: float = 0.0
    overtime: float = 0.0

    def add(self, row: AttendanceHistoryRow) -> None:
        self.records += 1
        self.counts[row.record.status.value] += 1
        self.work_hours += row.record.work_hours
        self.overtime += row.record.overtime

    def to_dict(self) -> dict:
        return {
            "records": self.records,
            "counts": dict(self.counts),
            "work_hours": round(self.work_hours, 2),
            "overtime": round(self.overtime, 2),
        }


@dataclass(frozen=True)
class AttendanceSummary:
    start: date
    end: date
    totals: AttendanceTotals
    per_user: List[dict]

    def to_dict(self) -> dict:
        return {
            "start": self.start.strftime("%Y-%m-%d"),
            "end": self.end.strftime("%Y-%m-%d"),
            **self.totals.to_dict(),
            "per_user": self.per_user,
        }


@dataclass(frozen=True)
class HistoryPage:
    rows: Sequence[AttendanceHistoryRow]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict:
        return {
            "histories": [r.to_dict() for r in self.rows],
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
        }


class AttendanceReportService:
    """Read side: history listing and status/hour summaries over stored records."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def summarize(self, *, start: date, end: date, user_id: Optional[int] = None) -> AttendanceSummary:
        if end < start:
            raise ValidationError("End date must not be before start date")

        rows = self._attendance.get_report_rows(start_date=start, end_date=end, user_id=user_id)

        totals = AttendanceTotals()
        by_user: Dict[int, AttendanceTotals] = {}
        names: Dict[int, tuple] = {}

        for r in rows:
            totals.add(r)
            by_user.setdefault(r.record.user_id, AttendanceTotals()).add(r)
            names[r.record.user_id] = (r.user_name, r.employee_code)

        per_user = [
            {"user_id": uid, "name": names[uid][0], "employee_code": names[uid][1], **t.to_dict()}
            for uid, t in sorted(by_user.items())
        ]
        return AttendanceSummary(start=start, end=end, totals=totals, per_user=per_user)

    def list_history(
        self,
        *,
        page: int = 1,
        limit: int = DEFAULT_HISTORY_PAGE_SIZE,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> HistoryPage:
        page = max(1, int(page))
        limit = max(1, int(limit))
        search = search.strip() if search else None

        rows, total = self._attendance.list_history(
            start_date=start,
            end_date=end,
            user_id=user_id,
            search=search or None,
            limit=limit,
            offset=(page - 1) * limit,
        )
        return HistoryPage(rows=rows, total=total, page=page, limit=limit)
