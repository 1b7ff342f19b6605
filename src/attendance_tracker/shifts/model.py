from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import time_string_to_minutes
from ..common.validators import require_non_negative, require_time_string
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ShiftPolicy:
    """Domain entity: one named work shift.

    Times are same-day wall-clock "HH:mm" strings. ``allow_late``/``allow_early`` are the
    grace minutes around start/end; ``overtime_before``/``overtime_after`` are the minimum
    minutes outside the shift before the excess counts as overtime.
    """

    shift_id: int
    code: str
    name: str
    start_time: str
    end_time: str
    break_start: Optional[str] = None
    break_end: Optional[str] = None
    allow_late: int = 0
    allow_early: int = 0
    overtime_before: int = 0
    overtime_after: int = 0

    def __post_init__(self) -> None:
        require_time_string(self.start_time, "start_time")
        require_time_string(self.end_time, "end_time")
        if self.has_break:
            require_time_string(self.break_start, "break_start")
            require_time_string(self.break_end, "break_end")
        for name in ("allow_late", "allow_early", "overtime_before", "overtime_after"):
            require_non_negative(getattr(self, name), name)

        if self.start_minutes >= self.end_minutes:
            raise ValidationError(f"Shift {self.code!r} must start before it ends")

    @property
    def start_minutes(self) -> int:
        return time_string_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_string_to_minutes(self.end_time)

    @property
    def has_break(self) -> bool:
        return bool(self.break_start and self.break_end)
