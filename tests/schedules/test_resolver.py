from datetime import datetime

import pytest

from attendance_tracker.core.exceptions import ValidationError
from attendance_tracker.schedules.model import WorkSchedule, normalize_day_mapping
from attendance_tracker.schedules.resolver import ExpectedShiftResolver
from attendance_tracker.users.model import User
from fakes import InMemorySchedules, InMemoryShifts

MONDAY_9AM = datetime(2026, 2, 2, 9, 0)
SATURDAY_9AM = datetime(2026, 2, 7, 9, 0)


@pytest.mark.parametrize(
    "raw",
    [
        {"Monday": 1, "Saturday": 2},
        [("monday", "1"), ("SATURDAY", 2)],
        '{"Monday": 1, "saturday": 2, "Sunday": null}',
        b'{"Monday": 1, "Saturday": 2, "Tuesday": ""}',
    ],
)
def test_normalize_day_mapping_accepts_stored_encodings(raw):
    assert normalize_day_mapping(raw) == {"Monday": 1, "Saturday": 2}


def test_normalize_day_mapping_rejects_garbage():
    assert normalize_day_mapping(None) == {}
    with pytest.raises(ValidationError):
        normalize_day_mapping({"Funday": 1})
    with pytest.raises(ValidationError):
        normalize_day_mapping("not json")
    with pytest.raises(ValidationError):
        normalize_day_mapping({"Monday": "first"})


def user(schedule_id=None) -> User:
    return User(user_id=1, employee_code="E001", name="Alice", email="a@example.com", work_schedule_id=schedule_id)


@pytest.fixture
def resolver(day_shift):
    schedules = InMemorySchedules([WorkSchedule(schedule_id=1, schedule_name="Mon only", shifts={"Monday": 1, "Tuesday": 5})])
    return ExpectedShiftResolver(schedules, InMemoryShifts([day_shift]))


def test_resolves_shift_for_the_weekday(resolver, day_shift):
    assert resolver.resolve(user(1), MONDAY_9AM) == day_shift


def test_no_expectation_cases(resolver):
    assert resolver.resolve(user(None), MONDAY_9AM) is None
    assert resolver.resolve(user(7), MONDAY_9AM) is None
    assert resolver.resolve(user(1), SATURDAY_9AM) is None
    # Tuesday points at a shift that no longer exists.
    assert resolver.resolve(user(1), datetime(2026, 2, 3, 9, 0)) is None
