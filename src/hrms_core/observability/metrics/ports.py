"""Observability – metric instrument ports.

Instruments are created once by their owner (the cache store creates its
hit/miss/eviction counters and an entry gauge) with constant labels bound
at creation, so hot paths only call ``inc`` or ``set``.
"""
from __future__ import annotations

import abc
from typing import Mapping


class Counter(abc.ABC):
    @abc.abstractmethod
    def inc(self, amount: float = 1.0) -> None: ...


class Gauge(abc.ABC):
    @abc.abstractmethod
    def set(self, value: float) -> None: ...


class Metrics(abc.ABC):
    """Port: creates instruments bound to *labels*."""

    @abc.abstractmethod
    def counter(
        self, name: str, description: str = "", labels: Mapping[str, str] | None = None
    ) -> Counter: ...

    @abc.abstractmethod
    def gauge(
        self, name: str, description: str = "", labels: Mapping[str, str] | None = None
    ) -> Gauge: ...


__all__ = ["Counter", "Gauge", "Metrics"]
