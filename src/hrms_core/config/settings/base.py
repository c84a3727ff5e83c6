"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, TypeVar

S = TypeVar("S", bound="Settings")


@dataclasses.dataclass
class Settings:
    """Base class for the ``HRMS_*`` settings dataclasses.

    Each field ``f`` of a subclass is read from ``<_prefix>_<F>``; every
    instance is checked by :meth:`_validate` on construction, including
    copies made with :meth:`with_changes`.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def with_changes(self: S, **changes: Any) -> S:
        return dataclasses.replace(self, **changes)

    def _validate(self) -> None:
        """Raise :class:`InvalidSettingValueError` for out-of-range values."""


__all__ = ["Settings"]
