from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import time_string_to_minutes
from ..core.enums import AttendanceStatus
from ..shifts.model import ShiftPolicy
from .model import WorkMetrics
from .strategies.base import CheckInStrategy
from .strategies.deferred_strategy import DeferredCheckInStrategy


def _overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> int:
    return max(0, min(end_a, end_b) - max(start_a, start_b))


class AttendanceCalculator:
    """Pure attendance arithmetic over pre-resolved inputs (no I/O).

    ``calculate_work_metrics`` is total for well-formed times: the worked interval is
    clamped to the shift, so every input yields non-negative hours and a defined status.
    """

    def __init__(self, check_in_strategy: Optional[CheckInStrategy] = None):
        self._check_in_strategy = check_in_strategy or DeferredCheckInStrategy()

    def determine_check_in_status(self, now: datetime, shift: ShiftPolicy) -> AttendanceStatus:
        return self._check_in_strategy.decide_checkin(now=now, shift=shift)

    @staticmethod
    def calculate_work_metrics(time_in: str, time_out: str, shift: ShiftPolicy) -> WorkMetrics:
        time_in_minutes = time_string_to_minutes(time_in)
        time_out_minutes = time_string_to_minutes(time_out)
        shift_start = shift.start_minutes
        shift_end = shift.end_minutes

        # No overlap between the worked interval and the shift.
        if time_in_minutes > shift_end or time_out_minutes < shift_start:
            return WorkMetrics(work_hours=0.0, overtime=0.0, status=AttendanceStatus.ABSENT)

        valid_start = max(time_in_minutes, shift_start)
        valid_end = min(time_out_minutes, shift_end)
        duration = max(0, valid_end - valid_start)

        if shift.has_break:
            duration -= _overlap(
                valid_start,
                valid_end,
                time_string_to_minutes(shift.break_start),
                time_string_to_minutes(shift.break_end),
            )
        work_hours = round(duration / 60, 2) if duration > 0 else 0.0

        ot_before = 0
        if time_in_minutes < shift_start:
            potential = shift_start - time_in_minutes
            if potential > shift.overtime_before:
                ot_before = potential

        ot_after = 0
        if time_out_minutes > shift_end:
            potential = time_out_minutes - shift_end
            if potential > shift.overtime_after:
                ot_after = potential

        total_ot = ot_before + ot_after
        overtime = round(total_ot / 60, 2) if total_ot > 0 else 0.0

        if time_in_minutes > shift_start + shift.allow_late:
            status = AttendanceStatus.LATE
        elif time_out_minutes < shift_end - shift.allow_early:
            status = AttendanceStatus.EARLY
        elif overtime > 0:
            status = AttendanceStatus.OVERTIME
        else:
            status = AttendanceStatus.ON_TIME

        return WorkMetrics(work_hours=work_hours, overtime=overtime, status=status)
