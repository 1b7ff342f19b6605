from datetime import datetime

import pytest

from attendance_tracker.common.cache import TTLCache
from attendance_tracker.core.enums import AttendanceStatus, AuthMethod
from attendance_tracker.core.exceptions import NotFoundError, UserNotFoundError
from attendance_tracker.users.service import UserService


@pytest.fixture
def service(env):
    return UserService(env.users, env.schedules, cache=TTLCache(300))


def test_lookups_by_id_are_cached(env, service):
    assert service.get_by_id(1).name == "Alice"
    assert service.get_by_id(1).name == "Alice"
    assert env.users.get_by_id_calls == 1


def test_require_raises_for_unknown_user(service):
    assert service.get_by_id(99) is None
    with pytest.raises(UserNotFoundError):
        service.require(99)


def test_schedule_assignment_invalidates_cache(env, service):
    assert service.get_by_id(2).work_schedule_id is None

    assert service.assign_work_schedule(2, 1).work_schedule_id == 1
    assert service.get_by_id(2).work_schedule_id == 1

    assert service.remove_work_schedule(2).work_schedule_id is None
    assert service.get_by_id(2).work_schedule_id is None


def test_assignment_errors(service):
    with pytest.raises(NotFoundError):
        service.assign_work_schedule(1, 42)
    with pytest.raises(UserNotFoundError):
        service.assign_work_schedule(99, 1)
    with pytest.raises(UserNotFoundError):
        service.remove_work_schedule(99)


def test_assignment_changes_next_days_expected_shift(env):
    env.container.user_service.assign_work_schedule(2, 1)
    record = env.container.attendance_service.process_event(
        user_id=2, device_id=1, auth_method=AuthMethod.CARD, now=datetime(2026, 2, 3, 8, 0)
    ).record
    assert record.expected_shift_id == 1
    assert record.status == AttendanceStatus.ON_TIME
