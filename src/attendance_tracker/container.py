from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.calculator import AttendanceCalculator
from .attendance.dispatcher import AttendanceEventDispatcher
from .attendance.factory import CheckInStrategyFactory
from .attendance.handler import DeviceEventHandler
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.notifications import RecentActivityFeed
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.cache import TTLCache
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .devices.gate import DeviceAuthorizationGate
from .devices.mysql_device_repository import MySQLDeviceRepository
from .devices.publisher import DevicePublisher, LoggingDevicePublisher
from .devices.repository import DeviceRepository
from .devices.verification import DeviceVerificationService
from .reports.service import AttendanceReportService
from .schedules.mysql_schedule_repository import MySQLWorkScheduleRepository
from .schedules.repository import WorkScheduleRepository
from .schedules.resolver import ExpectedShiftResolver
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    shifts_repo: ShiftRepository
    schedules_repo: WorkScheduleRepository
    devices_repo: DeviceRepository
    attendance_repo: AttendanceRepository

    publisher: DevicePublisher
    activity_feed: RecentActivityFeed

    user_service: UserService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    verification_service: DeviceVerificationService
    event_handler: DeviceEventHandler
    dispatcher: AttendanceEventDispatcher

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    users_repo: UserRepository,
    shifts_repo: ShiftRepository,
    schedules_repo: WorkScheduleRepository,
    devices_repo: DeviceRepository,
    attendance_repo: AttendanceRepository,
    publisher: Optional[DevicePublisher] = None,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    publisher = publisher or LoggingDevicePublisher()
    activity_feed = RecentActivityFeed(setting("RECENT_ACTIVITY_LIMIT", constants.DEFAULT_RECENT_ACTIVITY_LIMIT))

    user_service = UserService(
        users_repo,
        schedules_repo,
        cache=TTLCache(setting("USER_CACHE_TTL_SECONDS", constants.DEFAULT_USER_CACHE_TTL_SECONDS)),
    )
    calculator = AttendanceCalculator(CheckInStrategyFactory().for_policy(setting("CHECKIN_POLICY", "deferred")))
    attendance_service = AttendanceService(
        attendance_repo,
        user_service,
        devices_repo,
        shifts_repo,
        ExpectedShiftResolver(schedules_repo, shifts_repo),
        calculator=calculator,
        notifier=activity_feed,
    )
    gate = DeviceAuthorizationGate(
        user_service,
        enforce_fingerprint_membership=setting("ENFORCE_FINGERPRINT_MEMBERSHIP", True),
    )
    event_handler = DeviceEventHandler(attendance_service, devices_repo, gate, publisher)

    return Container(
        users_repo=users_repo,
        shifts_repo=shifts_repo,
        schedules_repo=schedules_repo,
        devices_repo=devices_repo,
        attendance_repo=attendance_repo,
        publisher=publisher,
        activity_feed=activity_feed,
        user_service=user_service,
        attendance_service=attendance_service,
        report_service=AttendanceReportService(attendance_repo),
        verification_service=DeviceVerificationService(
            devices_repo,
            publisher,
            timeout_seconds=setting("DEVICE_VERIFICATION_TIMEOUT_SECONDS", constants.DEFAULT_VERIFICATION_TIMEOUT_SECONDS),
        ),
        event_handler=event_handler,
        dispatcher=AttendanceEventDispatcher(
            event_handler,
            max_workers=setting("EVENT_WORKERS", constants.DEFAULT_EVENT_WORKERS),
        ),
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None, publisher: Optional[DevicePublisher] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        schedules_repo=MySQLWorkScheduleRepository(conn),
        devices_repo=MySQLDeviceRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        publisher=publisher,
        settings=settings,
        conn=conn,
    )
