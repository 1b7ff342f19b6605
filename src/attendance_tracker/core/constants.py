"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

EARLY_CHECKIN_MINUTES = 30

DEFAULT_USER_CACHE_TTL_SECONDS = 300
DEFAULT_VERIFICATION_TIMEOUT_SECONDS = 30
DEFAULT_EVENT_WORKERS = 8
DEFAULT_RECENT_ACTIVITY_LIMIT = 50
DEFAULT_HISTORY_PAGE_SIZE = 10

FINGER_ATTENDANCE_TOPIC = "finger_attendance"
CARD_ATTENDANCE_TOPIC = "card_attendance"
ATTENDANCE_NOTIFICATION_TOPIC = "attendance_notification"
VERIFY_DEVICE_TOPIC = "verify_device"
