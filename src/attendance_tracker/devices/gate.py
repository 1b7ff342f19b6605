from __future__ import annotations

import logging

from ..core.enums import AuthMethod
from ..core.exceptions import AuthorizationError, CardNotRegisteredError, FingerprintNotRegisteredError
from ..users.model import User
from ..users.service import UserService
from .model import Device

logger = logging.getLogger(__name__)


class DeviceAuthorizationGate:
    """Resolves the user behind a credential and checks they may use the device.

    Card users must be members of the device. Fingerprint users are resolved from the
    device's own enrolment slots; the membership check is applied to them as well unless
    ``enforce_fingerprint_membership`` is turned off.
    """

    def __init__(self, users: UserService, *, enforce_fingerprint_membership: bool = True):
        self._users = users
        self._enforce_fingerprint_membership = bool(enforce_fingerprint_membership)

    def authenticate_card(self, device: Device, card_number: str) -> User:
        user = self._users.find_by_card_number(str(card_number).strip())
        if not user:
            raise CardNotRegisteredError(f"User not found with card number: {card_number}")

        self.authorize(device, user, AuthMethod.CARD)
        return user

    def authenticate_fingerprint(self, device: Device, finger_id: int) -> User:
        user = self._users.find_by_fingerprint(device_id=device.device_id, finger_id=int(finger_id))
        if not user:
            raise FingerprintNotRegisteredError(f"User not found with finger ID: {finger_id}")

        self.authorize(device, user, AuthMethod.FINGERPRINT)
        return user

    def authorize(self, device: Device, user: User, auth_method: AuthMethod) -> None:
        if auth_method == AuthMethod.FINGERPRINT and not self._enforce_fingerprint_membership:
            return
        if not device.has_user(user.user_id):
            logger.warning("User %s is not authorized for device %s", user.user_id, device.device_mac)
            raise AuthorizationError(f"User {user.name} is not authorized for device {device.device_mac}")
