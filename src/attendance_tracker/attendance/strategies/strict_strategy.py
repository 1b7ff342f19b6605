from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_of_day
from ...core.constants import EARLY_CHECKIN_MINUTES
from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftPolicy
from .base import CheckInStrategy


class StrictCheckInStrategy(CheckInStrategy):
    """Early when arriving at least 30 minutes before start, otherwise on-time/late."""

    def decide_checkin(self, *, now: datetime, shift: ShiftPolicy) -> AttendanceStatus:
        current = minutes_of_day(now)
        start = shift.start_minutes

        if current <= start - EARLY_CHECKIN_MINUTES:
            return AttendanceStatus.EARLY
        if current <= start + shift.allow_late:
            return AttendanceStatus.ON_TIME
        return AttendanceStatus.LATE
