from __future__ import annotations

import logging
from typing import Optional

from ..common.cache import TTLCache
from ..core.exceptions import NotFoundError, UserNotFoundError
from ..schedules.repository import WorkScheduleRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: look up users for attendance and manage their schedule assignment.

    Lookups by id go through a TTL cache; every write to a user invalidates its entry.
    """

    def __init__(
        self,
        users: UserRepository,
        schedules: WorkScheduleRepository,
        *,
        cache: Optional[TTLCache[int, User]] = None,
    ):
        self._users = users
        self._schedules = schedules
        self._cache = cache if cache is not None else TTLCache(0)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._cache.get_or_load(int(user_id), self._users.get_by_id)

    def require(self, user_id: int) -> User:
        user = self.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User not found: {user_id}")
        return user

    def find_by_card_number(self, card_number: str) -> Optional[User]:
        return self._users.get_by_card_number(card_number)

    def find_by_fingerprint(self, *, device_id: int, finger_id: int) -> Optional[User]:
        return self._users.get_by_fingerprint(device_id=device_id, finger_id=finger_id)

    def assign_work_schedule(self, user_id: int, schedule_id: int) -> User:
        if not self._schedules.get_by_id(schedule_id):
            raise NotFoundError(f"Work schedule not found: {schedule_id}")
        if not self._users.set_work_schedule(user_id, int(schedule_id)):
            raise UserNotFoundError(f"User not found: {user_id}")

        self._cache.invalidate(int(user_id))
        logger.info("Assigned work schedule %s to user %s", schedule_id, user_id)
        return self.require(user_id)

    def remove_work_schedule(self, user_id: int) -> User:
        if not self._users.set_work_schedule(user_id, None):
            raise UserNotFoundError(f"User not found: {user_id}")

        self._cache.invalidate(int(user_id))
        logger.info("Removed work schedule from user %s", user_id)
        return self.require(user_id)
