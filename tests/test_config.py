# tests/test_config.py

import pytest

from core import config_validator
from core.config import settings


def test_profile_url_joins_base_and_path(monkeypatch):
    monkeypatch.setattr(settings, "IDENTITY_API_URL", "https://api.example.com/")
    monkeypatch.setattr(settings, "PROFILE_PATH", "auth/profile")
    assert settings.profile_url == "https://api.example.com/auth/profile"


def test_missing_identity_url_is_fatal(monkeypatch):
    monkeypatch.setattr(settings, "IDENTITY_API_URL", "")
    with pytest.raises(RuntimeError):
        config_validator.validate_config_on_startup()


def test_default_config_passes():
    assert config_validator.validate_required_config() == []


def test_settings_are_case_sensitive(monkeypatch):
    from core.config import Settings

    monkeypatch.setenv("profile_timeout_seconds", "3")
    monkeypatch.setenv("PROFILE_PATH", "/v2/profile")
    fresh = Settings()
    assert fresh.PROFILE_TIMEOUT_SECONDS == 12.0
    assert fresh.PROFILE_PATH == "/v2/profile"
