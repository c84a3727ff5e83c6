"""Application scheduler – Job dataclass."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

__all__ = ["Job"]


@dataclass
class Job:
    """Describes a recurring job fired every ``interval_seconds``."""

    id: str
    name: str
    handler: Callable[[], Awaitable[None]]
    interval_seconds: float
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.interval_seconds <= 0:
            raise ValueError("Job 'interval_seconds' must be positive")
