from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_of_day
from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftPolicy
from .base import CheckInStrategy


class DeferredCheckInStrategy(CheckInStrategy):
    """On-time unless past the late threshold.

    Arriving before the shift is not penalised here; the final status is decided at
    check-out from the work metrics.
    """

    def decide_checkin(self, *, now: datetime, shift: ShiftPolicy) -> AttendanceStatus:
        if minutes_of_day(now) > shift.start_minutes + shift.allow_late:
            return AttendanceStatus.LATE
        return AttendanceStatus.ON_TIME
