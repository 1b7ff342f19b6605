from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftPolicy


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how the status written at check-in is decided."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, shift: ShiftPolicy) -> AttendanceStatus:
        raise NotImplementedError
