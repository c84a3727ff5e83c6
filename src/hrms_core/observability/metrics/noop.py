"""Observability – NoopMetrics, used when no metrics backend is wired."""
from __future__ import annotations

from typing import Mapping

from hrms_core.observability.metrics.ports import Counter, Gauge, Metrics


class _Discard(Counter, Gauge):
    def inc(self, amount: float = 1.0) -> None:
        pass

    def set(self, value: float) -> None:
        pass


_DISCARD = _Discard()


class NoopMetrics(Metrics):
    def counter(
        self, name: str, description: str = "", labels: Mapping[str, str] | None = None
    ) -> Counter:
        return _DISCARD

    def gauge(
        self, name: str, description: str = "", labels: Mapping[str, str] | None = None
    ) -> Gauge:
        return _DISCARD


__all__ = ["NoopMetrics"]
