"""Config validation – errors raised while loading or checking settings."""
from __future__ import annotations

from hrms_core.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be built. Loaders also raise it for an unusable source."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A field without a default got no value from any source.

    *env_var* is the variable :class:`EnvSettingsLoader` looked up, when the
    failure comes from the environment.
    """
    default_code = "missing_setting"

    def __init__(self, setting_name: str, *, env_var: str | None = None) -> None:
        hint = f" (set {env_var})" if env_var else ""
        super().__init__(
            f"{setting_name} is required{hint}",
            detail={"setting": setting_name, "env_var": env_var},
        )
        self.setting_name = setting_name
        self.env_var = env_var


class InvalidSettingValueError(ConfigError):
    """A value failed coercion or a ``_validate`` rule, e.g. ``HRMS_CACHE_MAX_MEMORY=0``."""
    default_code = "invalid_setting"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} rejected: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
