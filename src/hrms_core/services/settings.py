"""Services – ServiceSettings."""

from __future__ import annotations

import dataclasses
from typing import ClassVar

from hrms_core.config.settings import Settings
from hrms_core.config.validation import InvalidSettingValueError

__all__ = ["ServiceSettings"]


@dataclasses.dataclass
class ServiceSettings(Settings):
    """Retry and caching knobs for the data-access services (``HRMS_SERVICE_*``)."""

    _prefix: ClassVar[str] = "HRMS_SERVICE"

    max_retries: int = 3
    retry_delay: float = 1.0
    query_ttl: int = 300
    batch_size: int = 100

    def _validate(self) -> None:
        if self.max_retries < 1:
            raise InvalidSettingValueError("max_retries", self.max_retries, "must be >= 1")
        if self.retry_delay < 0:
            raise InvalidSettingValueError("retry_delay", self.retry_delay, "must not be negative")
        if self.batch_size < 1:
            raise InvalidSettingValueError("batch_size", self.batch_size, "must be >= 1")
