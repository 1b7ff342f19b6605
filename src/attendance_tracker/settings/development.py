import copy
import os

from .base import *  # noqa: F401,F403
from .base import LOGGING as _BASE_LOGGING

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

LOGGING = copy.deepcopy(_BASE_LOGGING)
LOGGING["loggers"]["attendance_tracker"]["level"] = os.getenv("LOG_LEVEL", "DEBUG")
