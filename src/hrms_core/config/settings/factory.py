"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from hrms_core.config.settings.base import Settings
from hrms_core.config.settings.loaders import SettingsLoader
from hrms_core.config.validation.errors import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


def _required_fields(settings_cls: type[Settings]) -> list[str]:
    return [
        f.name
        for f in dataclasses.fields(settings_cls)  # type: ignore[arg-type]
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    ]


class SettingsFactory:
    """Build one settings object from several sources.

    Sources are merged field by field in order, so a later loader wins;
    *overrides* win over every loader. A loader raising :class:`ConfigError`
    contributes nothing. The merged values are validated once, by the
    dataclass itself.

    Usage::

        cache_settings = SettingsFactory.create(
            CacheSettings, [EnvSettingsLoader()], overrides={"cleanup_interval": 5}
        )
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        merged: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except ConfigError:
                continue
            merged.update(dataclasses.asdict(loaded))
        merged.update(overrides or {})

        missing = [name for name in _required_fields(settings_cls) if name not in merged]
        if missing:
            raise MissingRequiredSettingError(missing[0])

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
