from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import weekday_name
from ..shifts.model import ShiftPolicy
from ..shifts.repository import ShiftRepository
from ..users.model import User
from .repository import WorkScheduleRepository


class ExpectedShiftResolver:
    """Looks up which shift a user is expected to work on the day of an instant.

    ``None`` means "no expectation": the user has no schedule, the schedule has no shift
    for that weekday, or the referenced shift no longer exists.
    """

    def __init__(self, schedules: WorkScheduleRepository, shifts: ShiftRepository):
        self._schedules = schedules
        self._shifts = shifts

    def resolve(self, user: User, instant: datetime) -> Optional[ShiftPolicy]:
        if not user.work_schedule_id:
            return None

        schedule = self._schedules.get_by_id(user.work_schedule_id)
        if not schedule:
            return None

        shift_id = schedule.get_shift_for_day(weekday_name(instant))
        if not shift_id:
            return None
        return self._shifts.get_by_id(shift_id)
