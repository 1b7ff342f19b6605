from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_card_number(self, card_number: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_fingerprint(self, *, device_id: int, finger_id: int) -> Optional[User]:
        """Fingerprint slots are numbered per device, so the lookup is device-scoped."""

        raise NotImplementedError

    def set_work_schedule(self, user_id: int, schedule_id: Optional[int]) -> bool:
        raise NotImplementedError
