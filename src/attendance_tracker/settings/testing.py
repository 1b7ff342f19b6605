from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

USER_CACHE_TTL_SECONDS = 0
DEVICE_VERIFICATION_TIMEOUT_SECONDS = 1
EVENT_WORKERS = 4
