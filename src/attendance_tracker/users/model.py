from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: an employee.

    Note: Plain data object (no DB access code). ``work_schedule_id`` may be reassigned at
    any time and takes effect on the next attendance event.
    """

    user_id: int
    employee_code: str
    name: str
    email: str
    avatar: Optional[str] = None
    card_number: Optional[str] = None
    work_schedule_id: Optional[int] = None
