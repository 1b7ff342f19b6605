import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = False

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

USER_CACHE_TTL_SECONDS = int(os.getenv("USER_CACHE_TTL_SECONDS", "300"))
DEVICE_VERIFICATION_TIMEOUT_SECONDS = int(os.getenv("DEVICE_VERIFICATION_TIMEOUT_SECONDS", "30"))

# 'deferred': on-time/late only at check-in; 'strict': also 'early' for arrivals >= 30 min ahead
CHECKIN_POLICY = os.getenv("CHECKIN_POLICY", "deferred")
ENFORCE_FINGERPRINT_MEMBERSHIP = bool(int(os.getenv("ENFORCE_FINGERPRINT_MEMBERSHIP", "1")))

EVENT_WORKERS = int(os.getenv("EVENT_WORKERS", "8"))
RECENT_ACTIVITY_LIMIT = int(os.getenv("RECENT_ACTIVITY_LIMIT", "50"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "attendance_tracker": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
