from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    ON_TIME = "on-time"
    LATE = "late"
    EARLY = "early"
    ABSENT = "absent"
    OVERTIME = "overtime"


class AuthMethod(str, Enum):
    """How the user authenticated on the device."""

    FINGERPRINT = "fingerprint"
    CARD = "card"


class EventType(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class CheckInPolicy(str, Enum):
    """Which classifier decides the status written at check-in.

    DEFERRED only distinguishes on-time/late and leaves earliness to check-out metrics.
    STRICT also reports EARLY for arrivals well ahead of the shift start.
    """

    DEFERRED = "deferred"
    STRICT = "strict"
