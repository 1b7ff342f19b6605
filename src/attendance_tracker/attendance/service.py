from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_time_string, iso_timestamp, now_local
from ..core.enums import AttendanceStatus, AuthMethod, EventType
from ..core.exceptions import DeviceNotFoundError
from ..devices.model import Device
from ..devices.repository import DeviceRepository
from ..schedules.resolver import ExpectedShiftResolver
from ..shifts.repository import ShiftRepository
from ..users.model import User
from ..users.service import UserService
from .calculator import AttendanceCalculator
from .model import AttendanceRecord, AttendanceResult, CheckInDefaults, CheckOutUpdate
from .notifications import NotificationSink, RecentActivity
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: reconcile one device authentication into the user's daily record.

    The first event of a day creates the record (check-in); any later event closes it
    (check-out) and the last one of the day wins. An event carrying the same time as the
    stored check-in of an open record is a redelivery and leaves the record untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserService,
        devices: DeviceRepository,
        shifts: ShiftRepository,
        resolver: ExpectedShiftResolver,
        *,
        calculator: Optional[AttendanceCalculator] = None,
        notifier: Optional[NotificationSink] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._devices = devices
        self._shifts = shifts
        self._resolver = resolver
        self._calculator = calculator or AttendanceCalculator()
        self._notifier = notifier

    def process_event(
        self,
        *,
        user_id: int,
        device_id: int,
        auth_method: AuthMethod,
        now: Optional[datetime] = None,
    ) -> AttendanceResult:
        now = now or now_local()
        auth_method = AuthMethod(auth_method)

        user = self._users.require(user_id)
        device = self._devices.get_by_id(device_id)
        if not device:
            raise DeviceNotFoundError(f"Device not found: {device_id}")

        time_string = format_time_string(now)
        record, created = self._attendance.find_or_create(self._check_in_defaults(user, device, auth_method, now))

        if created or (record.is_open and record.time_in == time_string):
            logger.info("Check-in user=%s date=%s status=%s", user.user_id, record.work_date, record.status.value)
            self._notify(user, device, record, EventType.CHECK_IN)
            return AttendanceResult(type=EventType.CHECK_IN, message="Check-in successful", record=record)

        record = self._check_out(record, device, auth_method, time_string)
        logger.info(
            "Check-out user=%s date=%s status=%s hours=%s overtime=%s",
            user.user_id,
            record.work_date,
            record.status.value,
            record.work_hours,
            record.overtime,
        )
        self._notify(user, device, record, EventType.CHECK_OUT)
        return AttendanceResult(type=EventType.CHECK_OUT, message="Check-out successful", record=record)

    def _check_in_defaults(self, user: User, device: Device, auth_method: AuthMethod, now: datetime) -> CheckInDefaults:
        shift = self._resolver.resolve(user, now)
        status = self._calculator.determine_check_in_status(now, shift) if shift else AttendanceStatus.ABSENT

        return CheckInDefaults(
            user_id=user.user_id,
            work_date=now.date(),
            time_in=format_time_string(now),
            device_id=device.device_id,
            auth_method=auth_method,
            status=status,
            expected_shift_id=shift.shift_id if shift else None,
            expected_start_time=shift.start_time if shift else None,
            expected_end_time=shift.end_time if shift else None,
        )

    def _check_out(
        self,
        record: AttendanceRecord,
        device: Device,
        auth_method: AuthMethod,
        time_string: str,
    ) -> AttendanceRecord:
        metrics = None
        if record.expected_shift_id:
            shift = self._shifts.get_by_id(record.expected_shift_id)
            if shift:
                metrics = self._calculator.calculate_work_metrics(record.time_in, time_string, shift)
            else:
                logger.warning("Expected shift %s of record %s no longer exists", record.expected_shift_id, record.attendance_id)

        return self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            update=CheckOutUpdate(time_out=time_string, device_id=device.device_id, auth_method=auth_method, metrics=metrics),
        )

    def _notify(self, user: User, device: Device, record: AttendanceRecord, event_type: EventType) -> None:
        if self._notifier is None:
            return

        time_value = record.time_in if event_type == EventType.CHECK_IN else record.time_out
        auth_method = record.check_in_auth_method if event_type == EventType.CHECK_IN else record.check_out_auth_method
        activity = RecentActivity(
            user_name=user.name,
            user_avatar=user.avatar,
            time=time_value,
            device=device.description,
            auth_method=auth_method,
            timestamp=iso_timestamp(record.work_date, time_value),
            type=event_type,
        )
        try:
            self._notifier.send_recent_activity(activity)
        except Exception:
            # The record is already persisted; a dashboard push must not undo the event.
            logger.exception("Failed to send recent activity for record %s", record.attendance_id)

    def get_today_record(self, user_id: int, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        now = now or now_local()
        return self._attendance.get_for_user_and_date(user_id, now.date())
