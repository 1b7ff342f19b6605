from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, InvalidStateError, TimeoutError as FutureTimeoutError
from typing import Dict

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_VERIFICATION_TIMEOUT_SECONDS, VERIFY_DEVICE_TOPIC
from ..core.exceptions import ValidationError, VerificationTimeoutError
from .model import Device
from .publisher import DevicePublisher
from .repository import DeviceRepository

logger = logging.getLogger(__name__)


class DeviceVerificationService:
    """Registers a device only after it answers a verify request over the bus.

    ``register_device`` blocks the caller for at most ``timeout_seconds``; the bus
    consumer completes the wait through ``handle_verification_response``.
    """

    def __init__(
        self,
        devices: DeviceRepository,
        publisher: DevicePublisher,
        *,
        timeout_seconds: float = DEFAULT_VERIFICATION_TIMEOUT_SECONDS,
    ):
        self._devices = devices
        self._publisher = publisher
        self._timeout = float(timeout_seconds)
        self._pending: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def register_device(self, *, device_mac: str, description: str) -> Device:
        device_mac = require_non_empty(device_mac, "Device MAC")
        description = require_non_empty(description, "Description")

        if self._devices.get_by_mac(device_mac):
            raise ValidationError("Device already exists")

        waiter: Future = Future()
        with self._lock:
            if device_mac in self._pending:
                raise ValidationError("Device verification already in progress")
            self._pending[device_mac] = waiter

        try:
            self._publisher.publish(
                f"{VERIFY_DEVICE_TOPIC}_{device_mac}",
                {"deviceMac": device_mac, "action": "verify"},
            )
            verified = waiter.result(timeout=self._timeout)
        except FutureTimeoutError:
            logger.warning("Device %s did not answer verification within %ss", device_mac, self._timeout)
            raise VerificationTimeoutError("Verification timeout") from None
        except CancelledError:
            logger.warning("Verification of device %s was cancelled", device_mac)
            raise VerificationTimeoutError("Verification cancelled") from None
        finally:
            with self._lock:
                self._pending.pop(device_mac, None)

        if not verified:
            raise ValidationError("Device verification failed")

        device = self._devices.create(device_mac=device_mac, description=description)
        logger.info("Registered device %s (%s)", device.device_mac, device.description)
        return device

    def handle_verification_response(self, device_mac: str, verified: bool) -> bool:
        """Complete a pending verification. Returns False when nobody is waiting."""
        with self._lock:
            waiter = self._pending.get(device_mac)
        if waiter is None:
            logger.warning("No pending verification for device %s", device_mac)
            return False
        try:
            waiter.set_result(bool(verified))
        except InvalidStateError:
            # Already cancelled or answered.
            return False
        return True

    def cancel(self, device_mac: str) -> bool:
        with self._lock:
            waiter = self._pending.get(device_mac)
        return bool(waiter and waiter.cancel())

    def is_pending(self, device_mac: str) -> bool:
        with self._lock:
            return device_mac in self._pending
