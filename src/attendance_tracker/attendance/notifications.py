from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Protocol

from ..core.constants import DEFAULT_RECENT_ACTIVITY_LIMIT
from ..core.enums import AuthMethod, EventType


@dataclass(frozen=True)
class RecentActivity:
    """Payload pushed to dashboards after each check-in/check-out."""

    user_name: str
    user_avatar: Optional[str]
    time: str
    device: Optional[str]
    auth_method: AuthMethod
    timestamp: str
    type: EventType

    def to_dict(self) -> dict:
        return {
            "user": {"name": self.user_name, "avatar": self.user_avatar},
            "time": self.time,
            "device": self.device,
            "status": self.auth_method.value,
            "timestamp": self.timestamp,
            "type": self.type.value,
        }


class NotificationSink(Protocol):
    def send_recent_activity(self, activity: RecentActivity) -> None:
        raise NotImplementedError


class RecentActivityFeed(NotificationSink):
    """Bounded in-memory feed of the latest activities, newest first."""

    def __init__(self, limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT):
        self._items: Deque[RecentActivity] = deque(maxlen=int(limit))
        self._lock = threading.Lock()

    def send_recent_activity(self, activity: RecentActivity) -> None:
        with self._lock:
            self._items.appendleft(activity)

    def recent(self, limit: Optional[int] = None) -> List[RecentActivity]:
        with self._lock:
            items = list(self._items)
        return items if limit is None else items[: int(limit)]
