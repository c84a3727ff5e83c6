"""Unit tests for config settings, loaders and the settings factory."""

from dataclasses import dataclass
from typing import ClassVar

import pytest

from hrms_core.application.cache import CacheSettings
from hrms_core.config.settings import EnvSettingsLoader, Settings, SettingsFactory, SettingsLoader
from hrms_core.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from hrms_core.kernel.errors import ApplicationError
from hrms_core.services import ServiceSettings


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    ratio: float = 0.5
    debug: bool = False


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    api_url: str
    timeout: int = 5


class _StaticLoader(SettingsLoader):
    def __init__(self, **values):
        self._values = values

    def load(self, settings_class):
        return settings_class(**self._values)


class _FailingLoader(SettingsLoader):
    def load(self, settings_class):
        raise ConfigError("source unavailable")


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_and_coerces(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "example.com")
        monkeypatch.setenv("APP_PORT", "9000")
        monkeypatch.setenv("APP_RATIO", "0.75")
        monkeypatch.setenv("APP_DEBUG", "yes")
        settings = EnvSettingsLoader().load(AppSettings)
        assert settings == AppSettings(host="example.com", port=9000, ratio=0.75, debug=True)

    def test_defaults_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("APP_PORT", raising=False)
        assert EnvSettingsLoader().load(AppSettings).port == 8080

    def test_invalid_int(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "eighty")
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader().load(AppSettings)
        assert exc_info.value.setting_name == "APP_PORT"

    def test_missing_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_API_URL", raising=False)
        with pytest.raises(MissingRequiredSettingError, match="REQ_API_URL") as exc_info:
            EnvSettingsLoader().load(RequiredSettings)
        assert exc_info.value.setting_name == "api_url"

    def test_cache_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HRMS_CACHE_MAX_MEMORY", "1048576")
        monkeypatch.setenv("HRMS_CACHE_DEFAULT_TTL", "120")
        settings = EnvSettingsLoader().load(CacheSettings)
        assert settings.max_memory == 1048576
        assert settings.default_ttl == 120
        assert settings.cleanup_interval == 60

    def test_cache_settings_validation_surfaces(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HRMS_CACHE_MAX_MEMORY", "0")
        with pytest.raises(InvalidSettingValueError, match="max_memory"):
            EnvSettingsLoader().load(CacheSettings)

    def test_service_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HRMS_SERVICE_MAX_RETRIES", "5")
        monkeypatch.setenv("HRMS_SERVICE_RETRY_DELAY", "0.25")
        settings = EnvSettingsLoader().load(ServiceSettings)
        assert settings.max_retries == 5
        assert settings.retry_delay == 0.25
        assert settings.query_ttl == 300
        assert settings.batch_size == 100


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_later_loaders_win(self) -> None:
        settings = SettingsFactory.create(
            AppSettings, [_StaticLoader(port=1), _StaticLoader(port=2)]
        )
        assert settings.port == 2

    def test_overrides_win(self) -> None:
        settings = SettingsFactory.create(
            AppSettings, [_StaticLoader(port=1)], overrides={"port": 3}
        )
        assert settings.port == 3

    def test_failing_loader_skipped(self) -> None:
        settings = SettingsFactory.create(AppSettings, [_FailingLoader(), _StaticLoader(host="h")])
        assert settings.host == "h"

    def test_missing_required_after_merge(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            SettingsFactory.create(RequiredSettings, [_FailingLoader()])
        assert exc_info.value.env_var is None

    def test_validation_error_propagates(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(ServiceSettings, overrides={"max_retries": 0})


class TestConfigErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(ConfigError, ApplicationError)
        assert issubclass(MissingRequiredSettingError, ConfigError)
        assert issubclass(InvalidSettingValueError, ConfigError)

    def test_invalid_value_message(self) -> None:
        err = InvalidSettingValueError("batch_size", 0, "must be >= 1")
        assert err.message == "batch_size=0 rejected: must be >= 1"
        assert err.code == "invalid_setting"
        assert err.detail == {"setting": "batch_size", "reason": "must be >= 1"}

    def test_missing_message_names_env_var(self) -> None:
        err = MissingRequiredSettingError("api_url", env_var="REQ_API_URL")
        assert err.message == "api_url is required (set REQ_API_URL)"
        assert err.code == "missing_setting"

    def test_missing_message_without_env_var(self) -> None:
        err = MissingRequiredSettingError("api_url")
        assert err.message == "api_url is required"
        assert err.env_var is None


class TestSettingsBase:
    def test_env_key_uses_prefix(self) -> None:
        assert CacheSettings.env_key("max_memory") == "HRMS_CACHE_MAX_MEMORY"
        assert Settings.env_key("debug") == "DEBUG"

    def test_with_changes_revalidates(self) -> None:
        settings = ServiceSettings()
        assert settings.with_changes(batch_size=10).batch_size == 10
        with pytest.raises(InvalidSettingValueError, match="batch_size"):
            settings.with_changes(batch_size=0)
