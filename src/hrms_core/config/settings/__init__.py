"""Config settings – 12-factor env-based configuration."""
from hrms_core.config.settings.base import Settings
from hrms_core.config.settings.factory import SettingsFactory
from hrms_core.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
