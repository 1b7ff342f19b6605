from __future__ import annotations

from types import SimpleNamespace

import pytest

from attendance_tracker.container import wire_container
from attendance_tracker.devices.model import Device
from attendance_tracker.schedules.model import WorkSchedule
from attendance_tracker.shifts.model import ShiftPolicy
from attendance_tracker.users.model import User
from fakes import InMemoryAttendance, InMemoryDevices, InMemorySchedules, InMemoryShifts, InMemoryUsers, RecordingPublisher

DEVICE_MAC = "A0B1C2D3E4F5"


@pytest.fixture
def day_shift() -> ShiftPolicy:
    return ShiftPolicy(
        shift_id=1,
        code="HC",
        name="Office hours",
        start_time="08:00",
        end_time="17:00",
        break_start="12:00",
        break_end="13:00",
        allow_late=15,
        allow_early=15,
        overtime_before=30,
        overtime_after=30,
    )


@pytest.fixture
def env(day_shift):
    weekdays = WorkSchedule(
        schedule_id=1,
        schedule_name="Weekdays",
        shifts={"Monday": 1, "Tuesday": 1, "Wednesday": 1, "Thursday": 1, "Friday": 1},
    )
    users = InMemoryUsers(
        [
            User(user_id=1, employee_code="E001", name="Alice", email="alice@example.com", avatar="a.png", card_number="CARD-A", work_schedule_id=1),
            User(user_id=2, employee_code="E002", name="Bob", email="bob@example.com", card_number="CARD-B"),
            User(user_id=3, employee_code="E003", name="Carol", email="carol@example.com", card_number="CARD-C", work_schedule_id=1),
        ],
        fingerprints={(1, 7): 1, (1, 9): 3},
    )
    devices = InMemoryDevices([Device(device_id=1, device_mac=DEVICE_MAC, description="Front door", user_ids=frozenset({1, 2}))])
    shifts = InMemoryShifts([day_shift])
    schedules = InMemorySchedules([weekdays])
    attendance = InMemoryAttendance(users, devices)
    publisher = RecordingPublisher()

    settings = SimpleNamespace(
        USER_CACHE_TTL_SECONDS=0,
        DEVICE_VERIFICATION_TIMEOUT_SECONDS=1,
        CHECKIN_POLICY="deferred",
        ENFORCE_FINGERPRINT_MEMBERSHIP=True,
        EVENT_WORKERS=8,
        RECENT_ACTIVITY_LIMIT=20,
    )
    container = wire_container(
        users_repo=users,
        shifts_repo=shifts,
        schedules_repo=schedules,
        devices_repo=devices,
        attendance_repo=attendance,
        publisher=publisher,
        settings=settings,
    )

    yield SimpleNamespace(
        container=container,
        users=users,
        devices=devices,
        shifts=shifts,
        schedules=schedules,
        attendance=attendance,
        publisher=publisher,
        device_mac=DEVICE_MAC,
    )

    container.dispatcher.shutdown()
