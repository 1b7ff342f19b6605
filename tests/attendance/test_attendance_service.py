from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.container import wire_container
from attendance_tracker.core.enums import AttendanceStatus, AuthMethod, EventType
from attendance_tracker.core.exceptions import DeviceNotFoundError, UserNotFoundError
from attendance_tracker.schedules.resolver import ExpectedShiftResolver
from attendance_tracker.shifts.model import ShiftPolicy

MONDAY = date(2026, 2, 2)
SUNDAY = date(2026, 2, 1)


def at(day: date, hour: int, minute: int, second: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second)


def punch(env, user_id: int, now: datetime, auth_method=AuthMethod.CARD):
    return env.container.attendance_service.process_event(
        user_id=user_id, device_id=1, auth_method=auth_method, now=now
    )


def test_first_event_creates_record_with_shift_snapshot(env):
    result = punch(env, 1, at(MONDAY, 8, 5))

    assert result.type == EventType.CHECK_IN
    assert result.message == "Check-in successful"
    record = result.record
    assert record.is_open
    assert record.work_date == MONDAY
    assert record.time_in == "08:05:00"
    assert record.status == AttendanceStatus.ON_TIME
    assert record.check_in_auth_method == AuthMethod.CARD
    assert (record.expected_shift_id, record.expected_start_time, record.expected_end_time) == (1, "08:00", "17:00")


def test_check_in_past_grace_is_late(env):
    assert punch(env, 1, at(MONDAY, 8, 20)).record.status == AttendanceStatus.LATE


@pytest.mark.parametrize("user_id, day", [(2, MONDAY), (1, SUNDAY)])
def test_no_expected_shift_means_absent(env, user_id, day):
    record = punch(env, user_id, at(day, 9, 0)).record

    assert record.status == AttendanceStatus.ABSENT
    assert record.expected_shift_id is None
    assert record.expected_start_time is None


def test_second_event_checks_out_with_metrics(env):
    punch(env, 1, at(MONDAY, 8, 5))
    result = punch(env, 1, at(MONDAY, 17, 10), AuthMethod.FINGERPRINT)

    assert result.type == EventType.CHECK_OUT
    assert result.message == "Check-out successful"
    record = result.record
    assert record.time_out == "17:10:00"
    assert record.check_out_device_id == 1
    assert record.check_out_auth_method == AuthMethod.FINGERPRINT
    # 08:05-17:00 minus the 12:00-13:00 break.
    assert record.work_hours == 7.92
    assert record.overtime == 0
    assert record.status == AttendanceStatus.ON_TIME


def test_check_out_without_shift_keeps_absent_status(env):
    punch(env, 2, at(MONDAY, 9, 0))
    record = punch(env, 2, at(MONDAY, 18, 0)).record

    assert record.time_out == "18:00:00"
    assert record.status == AttendanceStatus.ABSENT
    assert record.work_hours == 0
    assert record.overtime == 0


def test_last_event_of_the_day_wins(env):
    punch(env, 1, at(MONDAY, 8, 0))
    early = punch(env, 1, at(MONDAY, 12, 0)).record
    assert early.status == AttendanceStatus.EARLY
    assert early.work_hours == 4.0

    last = punch(env, 1, at(MONDAY, 18, 0)).record
    assert last.attendance_id == early.attendance_id
    assert last.time_out == "18:00:00"
    assert last.work_hours == 8.0
    assert last.overtime == 1.0
    assert last.status == AttendanceStatus.OVERTIME
    assert len(env.attendance.all()) == 1


def test_redelivered_check_in_does_not_close_the_record(env):
    first = punch(env, 1, at(MONDAY, 8, 5))
    again = punch(env, 1, at(MONDAY, 8, 5))

    assert again.type == EventType.CHECK_IN
    assert again.record.is_open
    assert again.record == first.record
    assert env.attendance.creates == 1


def test_unknown_user_or_device_writes_nothing(env):
    with pytest.raises(UserNotFoundError):
        punch(env, 99, at(MONDAY, 8, 0))

    with pytest.raises(DeviceNotFoundError):
        env.container.attendance_service.process_event(
            user_id=1, device_id=42, auth_method=AuthMethod.CARD, now=at(MONDAY, 8, 0)
        )

    assert env.attendance.all() == []
    assert env.container.activity_feed.recent() == []


def test_each_event_is_pushed_to_the_activity_feed(env):
    punch(env, 1, at(MONDAY, 8, 5))
    punch(env, 1, at(MONDAY, 17, 10), AuthMethod.FINGERPRINT)

    latest, first = [a.to_dict() for a in env.container.activity_feed.recent()]
    assert first == {
        "user": {"name": "Alice", "avatar": "a.png"},
        "time": "08:05:00",
        "device": "Front door",
        "status": "card",
        "timestamp": "2026-02-02T08:05:00",
        "type": "check-in",
    }
    assert latest["type"] == "check-out"
    assert latest["status"] == "fingerprint"
    assert latest["timestamp"] == "2026-02-02T17:10:00"


def test_failing_notifier_does_not_fail_the_event(env):
    class BrokenSink:
        def send_recent_activity(self, activity):
            raise RuntimeError("dashboard offline")

    service = AttendanceService(
        env.attendance,
        env.container.user_service,
        env.devices,
        env.shifts,
        ExpectedShiftResolver(env.schedules, env.shifts),
        notifier=BrokenSink(),
    )
    result = service.process_event(user_id=1, device_id=1, auth_method=AuthMethod.CARD, now=at(MONDAY, 8, 5))

    assert result.type == EventType.CHECK_IN
    assert len(env.attendance.all()) == 1


def test_check_out_uses_shift_captured_at_check_in(env):
    punch(env, 1, at(MONDAY, 8, 5))

    env.shifts.shifts[2] = ShiftPolicy(shift_id=2, code="EV", name="Evening", start_time="13:00", end_time="22:00")
    env.schedules.schedules[1] = replace(env.schedules.schedules[1], shifts={"Monday": 2})

    record = punch(env, 1, at(MONDAY, 17, 10)).record
    assert record.expected_shift_id == 1
    assert record.work_hours == 7.92
    assert record.status == AttendanceStatus.ON_TIME


def test_check_out_skips_metrics_when_shift_was_deleted(env):
    punch(env, 1, at(MONDAY, 8, 5))
    del env.shifts.shifts[1]

    record = punch(env, 1, at(MONDAY, 17, 10)).record
    assert record.time_out == "17:10:00"
    assert record.status == AttendanceStatus.ON_TIME
    assert record.work_hours == 0


def test_concurrent_events_for_one_user_create_a_single_record(env):
    start = at(MONDAY, 8, 0)
    times = [start + timedelta(seconds=i) for i in range(16)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda now: punch(env, 1, now), times))

    assert env.attendance.creates == 1
    assert len(env.attendance.all()) == 1
    assert sum(r.type == EventType.CHECK_IN for r in results) == 1


def test_concurrent_events_for_different_users_proceed_independently(env):
    now = at(MONDAY, 8, 0)
    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(lambda uid: punch(env, uid, now), [1, 3]))

    assert [r.type for r in results] == [EventType.CHECK_IN, EventType.CHECK_IN]
    assert sorted(r.user_id for r in env.attendance.all()) == [1, 3]


def test_get_today_record(env):
    assert env.container.attendance_service.get_today_record(1, at(MONDAY, 7, 0)) is None
    punch(env, 1, at(MONDAY, 8, 5))
    assert env.container.attendance_service.get_today_record(1, at(MONDAY, 20, 0)).time_in == "08:05:00"


def test_strict_policy_marks_early_arrival_at_check_in(env):
    container = wire_container(
        users_repo=env.users,
        shifts_repo=env.shifts,
        schedules_repo=env.schedules,
        devices_repo=env.devices,
        attendance_repo=env.attendance,
        publisher=env.publisher,
        settings=SimpleNamespace(CHECKIN_POLICY="strict", EVENT_WORKERS=1),
    )
    try:
        record = container.attendance_service.process_event(
            user_id=1, device_id=1, auth_method=AuthMethod.CARD, now=at(MONDAY, 7, 0)
        ).record
    finally:
        container.dispatcher.shutdown()

    assert record.status == AttendanceStatus.EARLY
    assert record.expected_shift_id == 1
