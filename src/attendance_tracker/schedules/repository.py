from __future__ import annotations

from typing import Optional, Protocol

from .model import WorkSchedule


class WorkScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError
