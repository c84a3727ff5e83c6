"""Application cache – CacheSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from hrms_core.config.settings import Settings
from hrms_core.config.validation import InvalidSettingValueError

__all__ = ["CacheSettings"]


@dataclasses.dataclass
class CacheSettings(Settings):
    """Cache sizing and expiry, read from ``HRMS_CACHE_*`` variables."""

    _prefix: ClassVar[str] = "HRMS_CACHE"

    max_memory: int = 50 * 1024 * 1024
    default_ttl: int = 3600
    cleanup_interval: int = 60

    def _validate(self) -> None:
        if self.max_memory <= 0:
            raise InvalidSettingValueError("max_memory", self.max_memory, "must be positive")
        if self.cleanup_interval <= 0:
            raise InvalidSettingValueError(
                "cleanup_interval", self.cleanup_interval, "must be positive"
            )
