from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from ..core.constants import CARD_ATTENDANCE_TOPIC, DEFAULT_EVENT_WORKERS, FINGER_ATTENDANCE_TOPIC
from ..core.exceptions import ValidationError
from .handler import DeviceEventHandler
from .model import AttendanceResult

logger = logging.getLogger(__name__)


class AttendanceEventDispatcher:
    """Runs every inbound device event as its own task on a bounded worker pool.

    Events for different users proceed in parallel; two events for the same user and day
    are serialised by the repository's atomic find-or-create.
    """

    def __init__(self, handler: DeviceEventHandler, *, max_workers: int = DEFAULT_EVENT_WORKERS):
        self._handler = handler
        self._executor = ThreadPoolExecutor(max_workers=int(max_workers), thread_name_prefix="attendance-event")

    def submit(self, topic: str, payload: Any) -> "Future[AttendanceResult]":
        prefix = (topic or "").split("/", 1)[0]
        if prefix == FINGER_ATTENDANCE_TOPIC:
            future = self._executor.submit(self._handler.handle_fingerprint, topic, payload)
        elif prefix == CARD_ATTENDANCE_TOPIC:
            future = self._executor.submit(self._handler.handle_card, topic, payload)
        else:
            raise ValidationError(f"Unsupported attendance topic: {topic!r}")

        future.add_done_callback(lambda f: self._log_outcome(topic, f))
        return future

    def _log_outcome(self, topic: str, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Attendance event on %s failed", topic, exc_info=error)

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
