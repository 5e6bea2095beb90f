import pytest

from backend.core.config import AppSettings, ConfigurationError, load_app_settings


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("ATTENDANCE_THRESHOLD", "80")
    monkeypatch.setenv("STORE_BASE_URL", "http://store.local/api")

    settings = AppSettings()

    assert settings.ATTENDANCE_THRESHOLD == 80
    assert settings.STORE_BASE_URL == "http://store.local/api"


@pytest.mark.parametrize("threshold", ["0", "100", "seventy"])
def test_invalid_threshold_is_a_configuration_error(monkeypatch, threshold):
    monkeypatch.setenv("ATTENDANCE_THRESHOLD", threshold)

    with pytest.raises(ConfigurationError):
        load_app_settings()
