import importlib

import pytest

from attendance_tracker.settings import get_settings_module


@pytest.mark.parametrize(
    "app_env, module",
    [
        ("production", "attendance_tracker.settings.production"),
        ("PROD", "attendance_tracker.settings.production"),
        ("test", "attendance_tracker.settings.testing"),
        ("", "attendance_tracker.settings.development"),
        ("staging", "attendance_tracker.settings.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, app_env, module):
    monkeypatch.setenv("APP_ENV", app_env)
    assert get_settings_module() == module


def test_testing_settings_disable_cache_and_shorten_waits():
    settings = importlib.import_module("attendance_tracker.settings.testing")

    assert settings.USER_CACHE_TTL_SECONDS == 0
    assert settings.DEVICE_VERIFICATION_TIMEOUT_SECONDS == 1
    assert settings.CHECKIN_POLICY in {"deferred", "strict"}
    assert settings.LOGGING["loggers"]["attendance_tracker"]["handlers"] == ["console"]
