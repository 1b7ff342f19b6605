from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..core.constants import ATTENDANCE_NOTIFICATION_TOPIC
from ..core.enums import AuthMethod
from ..core.exceptions import (
    AuthorizationError,
    CardNotRegisteredError,
    DeviceNotFoundError,
    FingerprintNotRegisteredError,
    ValidationError,
)
from ..devices.gate import DeviceAuthorizationGate
from ..devices.model import Device
from ..devices.publisher import DevicePublisher
from ..devices.repository import DeviceRepository
from .model import AttendanceResult
from .service import AttendanceService

logger = logging.getLogger(__name__)


def device_message_for(error: BaseException) -> str:
    """Short text shown on the device display; never the internal error text."""
    if isinstance(error, FingerprintNotRegisteredError):
        return "Fingerprint Not Registered"
    if isinstance(error, CardNotRegisteredError):
        return "Card Not Registered"
    if isinstance(error, AuthorizationError):
        return "User Not Authorized"
    return "Not Recognized"


def _finger_id(credential) -> int:
    if isinstance(credential, bool):
        raise ValidationError(f"Fingerprint id must be an integer: {credential!r}")
    try:
        return int(str(credential).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Fingerprint id must be an integer: {credential!r}") from None


def device_mac_from_topic(topic: str) -> str:
    """``finger_attendance/<mac>`` -> ``<mac>``."""
    parts = (topic or "").split("/")
    if len(parts) < 2 or not parts[1]:
        raise ValidationError(f"Topic carries no device identity: {topic!r}")
    return parts[1]


class DeviceEventHandler:
    """Inbound side of the bus: turns raw device events into attendance outcomes.

    The device always gets an answer on ``attendance_notification/<mac>``: the user's
    name on success or a short failure text, after which the error is re-raised.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        devices: DeviceRepository,
        gate: DeviceAuthorizationGate,
        publisher: DevicePublisher,
    ):
        self._attendance = attendance
        self._devices = devices
        self._gate = gate
        self._publisher = publisher

    def handle_fingerprint(self, topic: str, finger_id: int, *, now: Optional[datetime] = None) -> AttendanceResult:
        return self._handle(device_mac_from_topic(topic), AuthMethod.FINGERPRINT, finger_id, now=now)

    def handle_card(self, topic: str, card_number: str, *, now: Optional[datetime] = None) -> AttendanceResult:
        return self._handle(device_mac_from_topic(topic), AuthMethod.CARD, card_number, now=now)

    def handle(self, device_mac: str, auth_method: AuthMethod, credential, *, now: Optional[datetime] = None) -> AttendanceResult:
        """Same as the topic handlers, for callers that already know the device MAC."""
        return self._handle(device_mac, AuthMethod(auth_method), credential, now=now)

    def _handle(self, device_mac: str, auth_method: AuthMethod, credential, *, now: Optional[datetime]) -> AttendanceResult:
        try:
            device = self._require_device(device_mac)
            if auth_method == AuthMethod.FINGERPRINT:
                user = self._gate.authenticate_fingerprint(device, _finger_id(credential))
            else:
                user = self._gate.authenticate_card(device, str(credential))

            self._notify_device(device_mac, user.name)
            return self._attendance.process_event(
                user_id=user.user_id,
                device_id=device.device_id,
                auth_method=auth_method,
                now=now,
            )
        except Exception as e:
            logger.warning("Rejected %s event from device %s: %s", auth_method.value, device_mac, e)
            try:
                self._notify_device(device_mac, device_message_for(e))
            except Exception:
                logger.exception("Failed to notify device %s of rejected event", device_mac)
            raise

    def _require_device(self, device_mac: str) -> Device:
        device = self._devices.get_by_mac(device_mac)
        if not device:
            raise DeviceNotFoundError(f"Device not found with MAC: {device_mac}")
        return device

    def _notify_device(self, device_mac: str, message: str) -> None:
        self._publisher.publish(f"{ATTENDANCE_NOTIFICATION_TOPIC}/{device_mac}", message)
