from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class DevicePublisher(Protocol):
    """Outbound side of the message bus towards devices."""

    def publish(self, topic: str, payload: Any) -> None:
        raise NotImplementedError


class LoggingDevicePublisher(DevicePublisher):
    """Publisher used when no bus client is wired in: messages only reach the log."""

    def publish(self, topic: str, payload: Any) -> None:
        logger.info("publish %s %r", topic, payload)
