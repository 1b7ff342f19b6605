import pytest

from attendance_tracker.core.exceptions import ValidationError, VerificationTimeoutError
from attendance_tracker.devices.verification import DeviceVerificationService
from fakes import InMemoryDevices


class AnsweringPublisher:
    """Plays the device: reacts to the verify request before the caller starts waiting."""

    def __init__(self, react):
        self.react = react
        self.messages = []
        self.service = None

    def publish(self, topic, payload):
        self.messages.append((topic, payload))
        self.react(self.service, payload["deviceMac"])


def make_service(react, *, devices=None, timeout=1):
    publisher = AnsweringPublisher(react)
    devices = devices or InMemoryDevices([])
    service = DeviceVerificationService(devices, publisher, timeout_seconds=timeout)
    publisher.service = service
    return service, publisher, devices


def test_device_is_created_after_positive_answer():
    service, publisher, devices = make_service(lambda s, mac: s.handle_verification_response(mac, True))

    device = service.register_device(device_mac="AA11BB22CC33", description="Lobby")

    assert device.device_id == 1
    assert devices.get_by_mac("AA11BB22CC33").description == "Lobby"
    assert publisher.messages == [("verify_device_AA11BB22CC33", {"deviceMac": "AA11BB22CC33", "action": "verify"})]
    assert not service.is_pending("AA11BB22CC33")


def test_negative_answer_creates_nothing():
    service, _, devices = make_service(lambda s, mac: s.handle_verification_response(mac, False))

    with pytest.raises(ValidationError, match="verification failed"):
        service.register_device(device_mac="AA11BB22CC33", description="Lobby")
    assert devices.get_by_mac("AA11BB22CC33") is None


def test_silent_device_times_out():
    service, _, devices = make_service(lambda s, mac: None, timeout=0.05)

    with pytest.raises(VerificationTimeoutError):
        service.register_device(device_mac="AA11BB22CC33", description="Lobby")
    assert devices.get_by_mac("AA11BB22CC33") is None
    assert not service.is_pending("AA11BB22CC33")
    # A late answer finds nobody waiting.
    assert service.handle_verification_response("AA11BB22CC33", True) is False


def test_cancelled_verification_is_reported_as_timeout():
    cancelled = []
    service, _, _ = make_service(lambda s, mac: cancelled.append(s.cancel(mac)))

    with pytest.raises(VerificationTimeoutError):
        service.register_device(device_mac="AA11BB22CC33", description="Lobby")
    assert cancelled == [True]


def test_second_registration_for_pending_mac_is_rejected():
    errors = []

    def react(s, mac):
        with pytest.raises(ValidationError) as exc:
            s.register_device(device_mac=mac, description="Again")
        errors.append(str(exc.value))
        s.handle_verification_response(mac, True)

    service, _, _ = make_service(react)
    service.register_device(device_mac="AA11BB22CC33", description="Lobby")

    assert errors == ["Device verification already in progress"]


def test_existing_device_and_blank_input_are_rejected(env):
    service, publisher, _ = make_service(lambda s, mac: None, devices=env.devices)

    with pytest.raises(ValidationError, match="already exists"):
        service.register_device(device_mac=env.device_mac, description="Dup")
    with pytest.raises(ValidationError):
        service.register_device(device_mac="  ", description="Lobby")
    assert publisher.messages == []
