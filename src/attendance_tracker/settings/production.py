import os

from .base import *  # noqa: F401,F403

# No fallback secret outside development/testing
SECRET_KEY = os.environ["SECRET_KEY"]

DEBUG = False
