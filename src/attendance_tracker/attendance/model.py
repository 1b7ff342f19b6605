from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, AuthMethod, EventType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day.

    Open while ``time_out`` is None. The expected shift fields are a snapshot taken at
    check-in and are never re-resolved afterwards.
    """

    attendance_id: int
    user_id: int
    work_date: date
    time_in: str
    check_in_device_id: int
    check_in_auth_method: AuthMethod
    status: AttendanceStatus
    time_out: Optional[str] = None
    check_out_device_id: Optional[int] = None
    check_out_auth_method: Optional[AuthMethod] = None
    expected_shift_id: Optional[int] = None
    expected_start_time: Optional[str] = None
    expected_end_time: Optional[str] = None
    work_hours: float = 0.0
    overtime: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.time_out is None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "time_in": self.time_in,
            "time_out": self.time_out,
            "check_in_device_id": self.check_in_device_id,
            "check_out_device_id": self.check_out_device_id,
            "check_in_auth_method": self.check_in_auth_method.value,
            "check_out_auth_method": self.check_out_auth_method.value if self.check_out_auth_method else None,
            "expected_shift_id": self.expected_shift_id,
            "expected_start_time": self.expected_start_time,
            "expected_end_time": self.expected_end_time,
            "status": self.status.value,
            "work_hours": self.work_hours,
            "overtime": self.overtime,
        }


@dataclass(frozen=True)
class CheckInDefaults:
    """Fields written only when the day's record is created."""

    user_id: int
    work_date: date
    time_in: str
    device_id: int
    auth_method: AuthMethod
    status: AttendanceStatus
    expected_shift_id: Optional[int] = None
    expected_start_time: Optional[str] = None
    expected_end_time: Optional[str] = None


@dataclass(frozen=True)
class WorkMetrics:
    work_hours: float
    overtime: float
    status: AttendanceStatus


@dataclass(frozen=True)
class CheckOutUpdate:
    time_out: str
    device_id: int
    auth_method: AuthMethod
    metrics: Optional[WorkMetrics] = None


@dataclass(frozen=True)
class AttendanceResult:
    type: EventType
    message: str
    record: AttendanceRecord


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model for history listings (record joined with user and devices)."""

    record: AttendanceRecord
    user_name: str
    employee_code: str
    check_in_device: Optional[str] = None
    check_out_device: Optional[str] = None

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out.update(
            {
                "user_name": self.user_name,
                "employee_code": self.employee_code,
                "check_in_device": self.check_in_device,
                "check_out_device": self.check_out_device,
            }
        )
        return out
