from __future__ import annotations

from typing import Optional, Protocol

from .model import ShiftPolicy


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[ShiftPolicy]:
        raise NotImplementedError
