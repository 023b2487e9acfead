import pytest
from pydantic import ValidationError

from chartd.config import Settings, get_settings


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CHARTD_BASE_URL", "CHARTD_IMAGE_TYPE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_at_chartd(monkeypatch):
    _clear_env(monkeypatch)
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.chartd_base_url == "https://chartd.co"
    assert settings.default_image_type == "svg"
    assert settings.log_level == "INFO"
    get_settings.cache_clear()


def test_environment_overrides(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CHARTD_BASE_URL", "https://charts.example.com")
    monkeypatch.setenv("CHARTD_IMAGE_TYPE", " Png ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.chartd_base_url == "https://charts.example.com"
    assert settings.default_image_type == "png"
    assert settings.log_level == "DEBUG"
    get_settings.cache_clear()


def test_unknown_image_type_is_rejected(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CHARTD_IMAGE_TYPE", "gif")

    with pytest.raises(ValidationError):
        Settings()
